"""Board access checks."""

from sqlalchemy.orm import Session

from src.models.board import Board, BoardMember


def get_board(db: Session, board_id: str) -> Board | None:
    """Get a live board by id."""
    return db.query(Board).filter(Board.id == board_id, Board.delete_at == 0).first()


def has_board_view_access(db: Session, user_id: str, board_id: str) -> bool:
    """Check whether a user may view a board.

    The board's creator and every member can view it.
    """
    creator = (
        db.query(Board.id).filter(Board.id == board_id, Board.created_by == user_id).first()
    )
    if creator:
        return True

    membership = (
        db.query(BoardMember)
        .filter(BoardMember.board_id == board_id, BoardMember.user_id == user_id)
        .first()
    )
    return membership is not None
