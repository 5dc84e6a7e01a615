"""Category domain model."""

from dataclasses import dataclass
from typing import Optional

from finance_tracker.domain.models.enums import CategoryType


@dataclass
class Category:
    """User-defined label for income or expense transactions."""

    category_id: Optional[int]
    user_id: int
    name: str
    category_type: CategoryType
    color: Optional[str] = None
    icon: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.category_type, str):
            self.category_type = CategoryType(self.category_type)
