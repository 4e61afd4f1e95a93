# storefront/services/review_service.py
import math
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.data.models.review import ReviewModel
from storefront.domain.errors import InvalidParameter, ProductNotFound
from storefront.repos.review_repo import ReviewRepo, SORT_COLUMNS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

SORT_ORDERS = ("asc", "desc")
RATINGS = ("1", "2", "3", "4", "5")
MAX_LIMIT = 100


class ReviewService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ReviewRepo(db)

    def list_reviews(
        self,
        product_id: int,
        page: int = 1,
        limit: int = 10,
        sort: str = "createdAt",
        order: str = "desc",
    ) -> Dict[str, Any]:
        """
        Strona recenzji + statystyki.
        Nieistniejacy produkt = pusty wynik (to nie jest sprawdzenie istnienia produktu).
        """
        if page < 1:
            raise InvalidParameter("Page must be greater than 0", field="page")
        if limit < 1 or limit > MAX_LIMIT:
            raise InvalidParameter(f"Limit must be between 1 and {MAX_LIMIT}", field="limit")
        if sort not in SORT_COLUMNS:
            raise InvalidParameter("Invalid sort field", field="sort")
        if order not in SORT_ORDERS:
            raise InvalidParameter("Order must be 'asc' or 'desc'", field="order")

        total = self.repo.count(product_id)
        counts = self.repo.rating_counts(product_id)

        distribution = {key: counts.get(int(key), 0) for key in RATINGS}
        rated = sum(distribution.values())
        if rated:
            average = round(sum(int(k) * v for k, v in distribution.items()) / rated, 1)
        else:
            average = 0

        offset = (page - 1) * limit
        #strona za koncem - bez zapytania (offset moze nie zmiescic sie w INTEGER)
        reviews = []
        if offset < total:
            reviews = self.repo.get_page(product_id, sort, order, offset=offset, limit=limit)

        return {
            "reviews": [self.review_view(r) for r in reviews],
            "total": total,
            "page": page,
            "limit": limit,
            "total_pages": math.ceil(total / limit),
            "average_rating": average,
            "rating_distribution": distribution,
        }

    def create_review(
        self,
        user_id: int,
        product_id: int,
        rating: int,
        title: str,
        comment: str,
        images: List[str] | None = None,
    ) -> Dict[str, Any]:
        if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
            raise InvalidParameter("Rating must be between 1 and 5", field="rating")

        if self.db.get(ProductModel, product_id) is None:
            raise ProductNotFound(product_id)

        review = self.repo.add(
            ReviewModel(
                product_id=product_id,
                user_id=user_id,
                rating=rating,
                title=title,
                comment=comment,
                images=list(images or []),
            )
        )
        logger.info(f"Review {review.id} ({rating}/5) added to product {product_id} by user {user_id}")
        return self.review_view(review)

    @staticmethod
    def review_view(review: ReviewModel) -> Dict[str, Any]:
        user = review.user
        return {
            "id": str(review.id),
            "product_id": str(review.product_id),
            "user_id": str(review.user_id),
            "user_name": (user.name or user.email) if user else "",
            "user_avatar": user.avatar_url if user else None,
            "rating": review.rating,
            "title": review.title,
            "comment": review.comment,
            "images": list(review.images or []),
            "likes": review.likes,
            "dislikes": review.dislikes,
            "is_verified": review.is_verified,
            "created_at": review.created_at,
            "updated_at": review.updated_at,
        }
