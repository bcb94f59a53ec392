"""Builds update_item arguments from plain attribute dicts."""
import hashlib
import string
import typing as ty

from . import codec
from .types import AttrDict, ItemKey

_HASH_LEN = 8


def _filter_alphanum(s: str) -> str:
    return "".join(c for c in s if c in string.ascii_letters or c in string.digits or c == "_")


def make_unique_expr_attr_key(attr_name: str) -> str:
    """Expression attribute placeholders may only contain alphanumerics and underscores"""
    clean = _filter_alphanum(attr_name)
    if clean == attr_name:
        return clean
    hashed = hashlib.sha256(attr_name.encode())
    return clean + "__dx__" + hashed.hexdigest()[:_HASH_LEN]


def build_setattrs(attrs_dict: AttrDict) -> ty.Tuple[str, dict, dict]:
    set_expr = "SET "
    expr_attr_names: ty.Dict[str, str] = dict()
    expr_attr_values = dict()
    for attrname, value in attrs_dict.items():
        key = make_unique_expr_attr_key(attrname)
        set_expr += f"#{key} = :{key}, "
        expr_attr_names[f"#{key}"] = attrname
        expr_attr_values[f":{key}"] = value
    return set_expr.rstrip(", "), expr_attr_names, expr_attr_values


def build_removeattrs(attr_names: ty.Collection[str]) -> ty.Tuple[str, dict]:
    expr_attr_names = {
        f"#{make_unique_expr_attr_key(attrname)}": attrname for attrname in sorted(attr_names)
    }
    remove_expr = "REMOVE " + ", ".join(expr_attr_names)
    return remove_expr, expr_attr_names


def item_exists_condition(key: ItemKey) -> ty.Tuple[str, dict]:
    # any one key attribute is enough to tell whether the item exists
    key_name = sorted(key)[0]
    return "attribute_exists(#_item_key)", {"#_item_key": key_name}


def build_update(
    key: ItemKey,
    *,
    set_attrs: ty.Optional[AttrDict] = None,
    remove_attrs: ty.Collection[str] = (),
    update_expression: ty.Optional[str] = None,
    condition_exists: bool = True,
    **update_args,
) -> ty.Dict[str, ty.Any]:
    """Generates low-level update_item arguments (minus TableName).

    Either give set_attrs/remove_attrs and let us write the
    UpdateExpression, or give your own update_expression along with any
    ExpressionAttributeNames/Values it needs (values in plain python;
    they are encoded here). Key attributes are never SET.
    """
    expr_attr_names: ty.Dict[str, str] = dict(update_args.pop("ExpressionAttributeNames", dict()))
    expr_attr_values: ty.Dict[str, ty.Any] = dict(
        update_args.pop("ExpressionAttributeValues", dict())
    )

    if update_expression:
        if set_attrs or remove_attrs:
            raise ValueError(
                "Provide either an update_expression or set/remove attributes, not both"
            )
        expression = update_expression
    else:
        parts = list()
        set_attrs = {k: v for k, v in (set_attrs or dict()).items() if k not in key}
        if set_attrs:
            set_expr, eans, eavs = build_setattrs(set_attrs)
            parts.append(set_expr)
            expr_attr_names.update(eans)
            expr_attr_values.update(eavs)
        if remove_attrs:
            remove_expr, eans = build_removeattrs(remove_attrs)
            parts.append(remove_expr)
            expr_attr_names.update(eans)
        if not parts:
            raise ValueError("Cannot perform an update with no attributes!")
        expression = " ".join(parts)

    update_args["UpdateExpression"] = expression
    update_args["Key"] = codec.encode_key(key)
    update_args.setdefault("ReturnValues", "ALL_NEW")

    if condition_exists:
        condition, eans = item_exists_condition(key)
        existing = update_args.get("ConditionExpression")
        update_args["ConditionExpression"] = (
            f"{existing} AND {condition}" if existing else condition
        )
        expr_attr_names.update(eans)

    if expr_attr_names:
        update_args["ExpressionAttributeNames"] = expr_attr_names
    if expr_attr_values:
        update_args["ExpressionAttributeValues"] = codec.encode(expr_attr_values)
    return update_args
