"""Domain error taxonomy"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for every error raised by the ordering and booking core"""

    def __init__(self, message: str, **detail: Any):
        super().__init__(message)
        self.message = message
        self.detail: Dict[str, Any] = detail

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": type(self).__name__,
            "message": self.message,
            "detail": {key: _plain(value) for key, value in self.detail.items()},
        }


def _plain(value: Any) -> Any:
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if hasattr(value, "value"):  # enums
        return value.value
    return str(value)


# Validation family: caller input is malformed


class InvalidInputError(DomainError):
    """Caller input is malformed and must be corrected"""


class InvalidSlotError(InvalidInputError):
    def __init__(self, slot: Any):
        super().__init__(
            f"Invalid time slot: {slot}. Please select a valid reservation time.",
            field="slot",
            value=slot,
        )


class InvalidPartySizeError(InvalidInputError):
    def __init__(self, party_size: Any, minimum: int, maximum: int):
        super().__init__(
            f"Guest count must be between {minimum} and {maximum}.",
            field="party_size",
            value=party_size,
            minimum=minimum,
            maximum=maximum,
        )


class InvalidTableError(InvalidInputError):
    def __init__(self, table_number: Any, max_tables: int):
        super().__init__(
            f"Invalid table number. Table number must be between 1 and {max_tables}.",
            field="table_number",
            value=table_number,
            minimum=1,
            maximum=max_tables,
        )


class MissingCustomerError(InvalidInputError):
    def __init__(self):
        super().__init__("User ID is required to create an order", field="customer_id")


class EmptyCartError(InvalidInputError):
    def __init__(self):
        super().__init__("Order must contain at least one item", field="items")


class InvalidLineItemError(InvalidInputError):
    def __init__(self, index: int, field: str, value: Any, reason: str):
        super().__init__(
            f"Line item {index}: {field} {reason}",
            field=field,
            index=index,
            value=value,
        )


class InvalidTaxRateError(InvalidInputError):
    def __init__(self, tax_rate: Any):
        super().__init__(
            "Tax rate must be a non-negative decimal",
            field="tax_rate",
            value=tax_rate,
        )


# Conflict family: legal in isolation, not given current state


class ConflictError(DomainError):
    """Operation conflicts with the current state; re-fetch before deciding"""


class SlotUnavailableError(ConflictError):
    def __init__(self, date: Any, slot: Any, capacity: int):
        super().__init__(
            f"The time slot {_plain(slot)} on {date} is no longer available.",
            date=date,
            slot=slot,
            capacity=capacity,
        )


class TableUnavailableError(ConflictError):
    def __init__(self, table_number: int, date: Any, slot: Any, held_by: str):
        super().__init__(
            f"Table {table_number} is already assigned for {_plain(slot)} on {date}.",
            table_number=table_number,
            date=date,
            slot=slot,
            held_by=held_by,
        )


class InvalidTransitionError(ConflictError):
    def __init__(self, entity: str, entity_id: Optional[str], current: Any, target: Any):
        super().__init__(
            f"Cannot move {entity} from '{_plain(current)}' to '{_plain(target)}'.",
            entity=entity,
            entity_id=entity_id,
            current_status=current,
            target_status=target,
        )


# Lookup failures


class NotFoundError(DomainError):
    """Referenced order or reservation does not exist"""


class OrderNotFoundError(NotFoundError):
    def __init__(self, order_id: str):
        super().__init__(f"Order {order_id} not found", order_id=order_id)


class ReservationNotFoundError(NotFoundError):
    def __init__(self, reservation_id: str):
        super().__init__(
            f"Reservation {reservation_id} not found",
            reservation_id=reservation_id,
        )


# Persistence collaborator failures


class StoreError(DomainError):
    """The persistence collaborator failed"""


class DuplicateIdError(StoreError):
    def __init__(self, kind: str, entity_id: str):
        super().__init__(
            f"{kind} with id {entity_id} already exists",
            kind=kind,
            entity_id=entity_id,
        )
