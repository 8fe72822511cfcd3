"""In-memory query handle and strategy for development and testing."""

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, Field

from ..domain import QueryBuildingContext
from ..events import EventBus
from .strategy import QueryStrategy


Record = Mapping[str, Any]


class InMemoryQuery(BaseModel):
    """Query handle filtering, sorting and paginating a list of records.

    Builder methods return a new query, so listeners replace the handle
    on the context rather than mutating it:

    >>> context.query = context.query.where("status", "published").paginate(10)

    Attributes:
        filters: Field/value pairs a record must match exactly.
        order_by: Field to sort on, or None to keep source order.
        descending: Sort direction when ``order_by`` is set.
        offset: Number of matching records to skip.
        limit: Maximum number of records to return, or None for all.
    """

    filters: dict[str, Any] = Field(default_factory=dict)
    order_by: str | None = None
    descending: bool = False
    offset: int = Field(default=0, ge=0)
    limit: int | None = Field(default=None, ge=0)

    def where(self, field: str, value: Any) -> "InMemoryQuery":
        return self._with(filters={**self.filters, field: value})

    def sort(self, field: str, descending: bool = False) -> "InMemoryQuery":
        return self._with(order_by=field, descending=descending)

    def paginate(self, limit: int | None, offset: int = 0) -> "InMemoryQuery":
        """Return a query limited to ``limit`` records starting at ``offset``.

        Raises:
            ValidationError: If ``limit`` or ``offset`` is negative.
        """
        return self._with(limit=limit, offset=offset)

    def _with(self, **changes: Any) -> "InMemoryQuery":
        # model_copy skips validation, so rebuild through model_validate
        return self.model_validate({**self.model_dump(), **changes})

    def matches(self, record: Record) -> bool:
        return all(
            field in record and record[field] == value for field, value in self.filters.items()
        )

    def apply(self, records: Iterable[Record]) -> list[Record]:
        """Run the query against ``records``.

        Args:
            records: Source records, each a mapping of field names to values.

        Records missing the ``order_by`` field (or holding ``None``) sort
        last in either direction. The remaining values must be comparable
        with each other.

        Returns:
            The matching records after sorting and pagination.
        """
        matching = [record for record in records if self.matches(record)]
        if self.order_by is not None:
            field = self.order_by
            present = [record for record in matching if record.get(field) is not None]
            missing = [record for record in matching if record.get(field) is None]
            present.sort(key=lambda record: record[field], reverse=self.descending)
            matching = present + missing
        end = None if self.limit is None else self.offset + self.limit
        return matching[self.offset : end]


class InMemoryQueryStrategy(QueryStrategy[InMemoryQuery]):
    """Query strategy serving records held in memory.

    Item loads look up the identifier in the process context's request
    (``process_context.request[identifier_parameter]``) and match it
    against ``identifier_field``. Collection loads return every record the
    query matches once listeners have had their say.

    This implementation is suitable for:
    - Unit tests (fast, no external dependencies)
    - Development and experimentation
    - Examples and documentation

    Args:
        records: The records to serve. The list is read at execution time,
            so later additions are visible to subsequent loads.
        identifier_field: Record field holding the item identifier.
        identifier_parameter: Request attribute holding the requested
            identifier.
    """

    def __init__(
        self,
        records: list[Record],
        identifier_field: str = "id",
        identifier_parameter: str = "id",
    ):
        self.records = records
        self.identifier_field = identifier_field
        self.identifier_parameter = identifier_parameter

    def instantiate_query_handle(
        self, context: QueryBuildingContext[InMemoryQuery], event_name: str, bus: EventBus
    ) -> None:
        context.query = InMemoryQuery()

    def configure_for_collection(
        self, context: QueryBuildingContext[InMemoryQuery], event_name: str, bus: EventBus
    ) -> None:
        pass

    def configure_for_item(
        self, context: QueryBuildingContext[InMemoryQuery], event_name: str, bus: EventBus
    ) -> None:
        request: Mapping[str, Any] = getattr(context.process_context, "request", {})
        identifier = request.get(self.identifier_parameter)
        context.query = self._query(context).where(self.identifier_field, identifier).paginate(1)

    def execute_collection_query(
        self, context: QueryBuildingContext[InMemoryQuery], event_name: str, bus: EventBus
    ) -> list[Record]:
        return self._query(context).apply(self.records)

    def execute_item_query(
        self, context: QueryBuildingContext[InMemoryQuery], event_name: str, bus: EventBus
    ) -> Record | None:
        found = self._query(context).apply(self.records)
        return found[0] if found else None

    def _query(self, context: QueryBuildingContext[InMemoryQuery]) -> InMemoryQuery:
        query = context.query
        if not isinstance(query, InMemoryQuery):
            raise TypeError(
                f"Expected an InMemoryQuery handle, got {type(query).__name__}"
            )
        return query
