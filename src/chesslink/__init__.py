"""chesslink — two-player chess rules engine with lobby and board UI."""

__version__ = "0.1.0"
