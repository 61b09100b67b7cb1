"""Interactive diff review."""

from coda.interface.cli.diff.review import ChangeReview, ReviewChoice, ReviewOutcome

__all__ = ["ChangeReview", "ReviewChoice", "ReviewOutcome"]
