"""Translation between plain python records and DynamoDB's wire format.

boto3's low-level client speaks only in typed attribute values
(`{"S": "foo"}`), so everything going in and out of the store passes
through here. Numbers come back as int when they are whole and float
otherwise, so a Decimal you wrote comes back as one of those.

DynamoDB has no empty set, so an empty set is written as null and
comes back as None.
"""
import decimal
import typing as ty

from boto3.dynamodb.types import TypeDeserializer, TypeSerializer

from .exceptions import UnencodableValue
from .types import AttributeValue, InputRecord, ItemKey, Record, WireItem

__ds = TypeDeserializer()
__sr = TypeSerializer()

decimal_context = decimal.Context(
    Emin=-128, Emax=126, prec=38, traps=[decimal.Clamped, decimal.Overflow, decimal.Underflow]
)


def float_to_decimal(Float: float) -> decimal.Decimal:
    # going through repr keeps 0.1 as Decimal('0.1') rather than its binary expansion
    return decimal_context.create_decimal(repr(Float))


def decimal_to_number(dec: decimal.Decimal) -> ty.Union[int, float]:
    if dec == dec.to_integral_value():
        return int(dec)
    return float(dec)


def prepare_value(value: ty.Any) -> ty.Any:
    """boto3 will yell if you provide floats, tuples or empty sets, so we fix them up.

    Applied recursively through maps and lists.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        return float_to_decimal(value)
    if isinstance(value, ty.Mapping):
        return {k: prepare_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [prepare_value(v) for v in value]
    if isinstance(value, (set, frozenset)):
        if not value:
            # DynamoDB has no empty set; it expects the attribute to be null instead
            return None
        return {prepare_value(v) for v in value}
    return value


def restore_numbers(value: ty.Any) -> ty.Any:
    """The deserializer gives us Decimals everywhere; callers want ints and floats."""
    if isinstance(value, decimal.Decimal):
        return decimal_to_number(value)
    if isinstance(value, dict):
        return {k: restore_numbers(v) for k, v in value.items()}
    if isinstance(value, list):
        return [restore_numbers(v) for v in value]
    if isinstance(value, set):
        return {restore_numbers(v) for v in value}
    return value


def encode_value(value: ty.Any) -> AttributeValue:
    return __sr.serialize(prepare_value(value))


def decode_value(attribute_value: AttributeValue) -> ty.Any:
    return restore_numbers(__ds.deserialize(attribute_value))


def encode(record: InputRecord) -> WireItem:
    """Record -> WireItem

    Raises UnencodableValue for anything DynamoDB cannot store, e.g. NaN
    or a number beyond its 38 digits of precision.
    """
    wire_item = dict()
    for attr_name, value in record.items():
        try:
            wire_item[attr_name] = encode_value(value)
        except (TypeError, decimal.DecimalException) as err:
            raise UnencodableValue(
                f"Attribute {attr_name} cannot be stored in DynamoDB: {err}",
                attribute=attr_name,
                cause=err,
            ) from err
    return wire_item


def decode(wire_item: ty.Mapping[str, AttributeValue]) -> Record:
    """WireItem -> Record"""
    return {k: decode_value(v) for k, v in wire_item.items()}


def encode_key(key: ItemKey) -> WireItem:
    return encode(key)


def decode_all(wire_items: ty.Iterable[ty.Mapping[str, AttributeValue]]) -> ty.List[Record]:
    return [decode(wi) for wi in wire_items]
