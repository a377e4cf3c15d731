from votigo.extensions import db


class Vote(db.Model):
    __tablename__ = "votes"
    __table_args__ = (
        db.UniqueConstraint("category_id", "nickname", name="uq_votes_category_nickname"),
    )

    id = db.Column(db.Integer, primary_key=True)
    category_id = db.Column(
        db.Integer,
        db.ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Always stored lowercased; the nickname is the voter's only identity.
    nickname = db.Column(db.String(200), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, server_default=db.func.current_timestamp())

    selections = db.relationship(
        "VoteSelection",
        backref="vote",
        lazy=True,
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="(VoteSelection.rank, VoteSelection.id)",
    )
