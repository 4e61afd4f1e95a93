# storefront/repos/review_repo.py
from sqlalchemy import select, func
from sqlalchemy.orm import Session

from storefront.data.models.review import ReviewModel

SORT_COLUMNS = {
    "createdAt": ReviewModel.created_at,
    "rating": ReviewModel.rating,
    "likes": ReviewModel.likes,
}


class ReviewRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_page(self, product_id: int, sort: str, order: str, offset: int, limit: int) -> list[ReviewModel]:
        column = SORT_COLUMNS[sort]
        direction = column.desc() if order == "desc" else column.asc()
        tiebreak = ReviewModel.id.desc() if order == "desc" else ReviewModel.id.asc()
        return list(
            self.db.execute(
                select(ReviewModel)
                .where(ReviewModel.product_id == product_id)
                .order_by(direction, tiebreak)
                .offset(offset)
                .limit(limit)
            ).unique().scalars().all()
        )

    def count(self, product_id: int) -> int:
        return self.db.execute(
            select(func.count(ReviewModel.id)).where(ReviewModel.product_id == product_id)
        ).scalar_one()

    def rating_counts(self, product_id: int) -> dict[int, int]:
        rows = self.db.execute(
            select(ReviewModel.rating, func.count(ReviewModel.id))
            .where(ReviewModel.product_id == product_id)
            .group_by(ReviewModel.rating)
        ).all()
        return {rating: count for rating, count in rows}

    def add(self, review: ReviewModel) -> ReviewModel:
        self.db.add(review)
        self.db.commit()
        self.db.refresh(review)
        return review
