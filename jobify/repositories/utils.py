# jobify/repositories/utils.py
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Sequence, Type

from beanie import Document
from bson import ObjectId
from bson.errors import InvalidId


def parse_object_id(value: Any) -> Optional[ObjectId]:
    """Malformed ids resolve to None so callers can answer 404 instead of 500."""
    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str):
        return None
    try:
        return ObjectId(value)
    except InvalidId:
        return None


def summary(doc: Optional[Document], fields: Sequence[str]) -> Optional[Dict[str, Any]]:
    if doc is None:
        return None
    out: Dict[str, Any] = {"_id": str(doc.id)}
    for name in fields:
        value = getattr(doc, name)
        out[name] = value.value if isinstance(value, Enum) else value
    return out


async def summaries(
    model: Type[Document], ids: Iterable[ObjectId], fields: Sequence[str]
) -> Dict[ObjectId, Dict[str, Any]]:
    """Fetch the referenced records in one query and key their summaries by id."""
    wanted = list({i for i in ids if i is not None})
    if not wanted:
        return {}
    docs = await model.find({"_id": {"$in": wanted}}).to_list()
    return {doc.id: summary(doc, fields) for doc in docs}
