# catalog_sdk/models.py
import time
from enum import Enum
from typing import Optional, Dict, Any, List, Union

from pydantic import BaseModel, ConfigDict, Field


class PermanentId(BaseModel):
    model_config = ConfigDict(frozen=True)
    value: int


class TemporaryId(BaseModel):
    model_config = ConfigDict(frozen=True)
    token: int


ProductId = Union[PermanentId, TemporaryId]


class ProductDraft(BaseModel):
    """A product as the user edits it: everything except the id."""
    name: str = ""
    price: float = 0.0
    image: str = ""
    description: str = ""
    category: str = ""


class Product(ProductDraft):
    id: int
    # set only on records created while offline; never sent to the backend
    temporary: bool = False

    @property
    def identity(self) -> ProductId:
        if self.temporary:
            return TemporaryId(token=self.id)
        return PermanentId(value=self.id)

    def to_draft(self) -> ProductDraft:
        return ProductDraft(**self.model_dump(exclude={"id", "temporary"}))

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(exclude={"temporary"})


class ProductFilters(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    category: Optional[str] = None
    min_price: Optional[float] = Field(default=None, alias="minPrice")
    max_price: Optional[float] = Field(default=None, alias="maxPrice")
    search_term: Optional[str] = Field(default=None, alias="searchTerm")
    sort_by: Optional[str] = Field(default=None, alias="sortBy")
    sort_order: str = Field(default="asc", alias="sortOrder")
    offset: Optional[int] = None
    limit: Optional[int] = None

    def is_unfiltered(self) -> bool:
        """True when the result is the whole collection in backend order."""
        return all(
            v is None for v in (
                self.category, self.min_price, self.max_price, self.search_term,
                self.sort_by, self.offset, self.limit,
            )
        )

    def to_query_params(self) -> Dict[str, Any]:
        params = self.model_dump(by_alias=False, exclude_none=True)
        if self.sort_by is None:
            params.pop("sort_order", None)
        return params


class ValidationError(BaseModel):
    field: str
    message: str


class OperationType(str, Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


def now_ms() -> int:
    return int(time.time() * 1000)


class PendingOperation(BaseModel):
    type: OperationType
    # full record for CREATE/UPDATE, at least {"id": ...} for DELETE
    product: Dict[str, Any]
    timestamp: int = Field(default_factory=now_ms)

    @classmethod
    def for_product(cls, op_type: OperationType, product: Product) -> "PendingOperation":
        return cls(type=op_type, product=product.model_dump())

    @property
    def product_id(self) -> Optional[int]:
        return self.product.get("id")


class ConnectivityStatus(BaseModel):
    is_offline: bool
    is_server_available: bool


class MutationResult(BaseModel):
    product: Optional[Product] = None
    errors: List[ValidationError] = Field(default_factory=list)
    # True when the offline path handled the call and a PendingOperation was logged
    queued: bool = False

    @property
    def ok(self) -> bool:
        return not self.errors


class SyncReport(BaseModel):
    synced: List[PendingOperation] = Field(default_factory=list)
    failed: List[PendingOperation] = Field(default_factory=list)
    dropped: List[PendingOperation] = Field(default_factory=list)
    skipped: bool = False


class CategoryCount(BaseModel):
    name: str
    count: int


class CatalogStatistics(BaseModel):
    total_products: int
    total_value: float
    avg_price: float
    categories: List[CategoryCount]
