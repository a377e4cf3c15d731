from votigo.extensions import db

VOTE_TYPES = ("single", "ranked", "approval")
STATUSES = ("draft", "open", "closed", "archived")
SHOW_RESULTS = ("live", "after_close")

DEFAULT_MAX_RANK = 3


class Category(db.Model):
    __tablename__ = "categories"
    __table_args__ = (
        db.CheckConstraint(
            "vote_type IN ('single', 'ranked', 'approval')", name="ck_categories_vote_type"
        ),
        db.CheckConstraint(
            "status IN ('draft', 'open', 'closed', 'archived')", name="ck_categories_status"
        ),
        db.CheckConstraint(
            "show_results IN ('live', 'after_close')", name="ck_categories_show_results"
        ),
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    vote_type = db.Column(db.String(20), nullable=False)
    status = db.Column(db.String(20), nullable=False, default="draft")
    show_results = db.Column(db.String(20), nullable=False, default="after_close")
    max_rank = db.Column(db.Integer, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, server_default=db.func.current_timestamp())

    options = db.relationship(
        "Option",
        backref="category",
        lazy=True,
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="(Option.sort_order, Option.id)",
    )
    votes = db.relationship(
        "Vote",
        backref="category",
        lazy=True,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Category {self.id} {self.name!r} {self.vote_type}/{self.status}>"


def effective_max_rank(category):
    """Stored max rank of a ranked category, or the system-wide default of 3."""
    if category.max_rank:
        return category.max_rank
    return DEFAULT_MAX_RANK
