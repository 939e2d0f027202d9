import attrs


def _validate_non_empty_string(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not value or not value.strip():
        raise ValueError(f'Event {attribute.name} cannot be empty')


@attrs.define(frozen=True)
class EventEntity:
    """Read-only after load; the catalog never changes an event."""

    id: int
    name: str = attrs.field(validator=_validate_non_empty_string)
    organization: str = ''
    date: str = ''
    price: float = 0.0
    rating: str = ''
    image_url: str = ''
    created_at: str = ''
    location: str = ''
