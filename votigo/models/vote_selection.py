from votigo.extensions import db


class VoteSelection(db.Model):
    __tablename__ = "vote_selections"

    id = db.Column(db.Integer, primary_key=True)
    vote_id = db.Column(
        db.Integer,
        db.ForeignKey("votes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    option_id = db.Column(
        db.Integer,
        db.ForeignKey("options.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    rank = db.Column(db.Integer, nullable=True)
