from quire.domain.editorial.aggregates.magazine import Magazine, MagazineItem
from quire.domain.editorial.aggregates.submission import Submission

__all__ = ["Magazine", "MagazineItem", "Submission"]
