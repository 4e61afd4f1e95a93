# storefront/api/routers/reviews.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_user_identity, parse_id
from storefront.data.database import get_db
from storefront.domain.identity import UserIdentity
from storefront.domain.schemas import ReviewIn, ReviewListOut, ReviewOut
from storefront.services.review_service import ReviewService

router = APIRouter(prefix="/products/{product_id}/reviews", tags=["reviews"])


def get_service(db: Session = Depends(get_db)) -> ReviewService:
    return ReviewService(db)


@router.get("", response_model=ReviewListOut)
def list_reviews(
    product_id: str,
    page: int = Query(1),
    limit: int = Query(10),
    sort: str = Query("createdAt"),
    order: str = Query("desc"),
    svc: ReviewService = Depends(get_service),
):
    return svc.list_reviews(
        parse_id(product_id, "Invalid product ID"),
        page=page,
        limit=limit,
        sort=sort,
        order=order,
    )


@router.post("", response_model=ReviewOut, status_code=201)
def add_review(
    product_id: str,
    payload: ReviewIn,
    identity: UserIdentity = Depends(get_user_identity),
    svc: ReviewService = Depends(get_service),
):
    return svc.create_review(
        user_id=identity.id,
        product_id=parse_id(product_id, "Invalid product ID"),
        rating=payload.rating,
        title=payload.title,
        comment=payload.comment,
        images=payload.images,
    )
