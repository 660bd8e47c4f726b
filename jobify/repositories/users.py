# jobify/repositories/users.py
import logging
from typing import Any, Dict, Iterable, Optional

from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from jobify.core.errors import ConflictError
from jobify.core.security import hash_password
from jobify.db.documents import Role, User
from jobify.repositories.utils import parse_object_id, summaries

logger = logging.getLogger(__name__)

USER_EXISTS_MSG = "User already exists"


async def get_user(user_id: Any) -> Optional[User]:
    oid = parse_object_id(user_id)
    if oid is None:
        return None
    return await User.get(oid)


async def get_user_by_email(email: str) -> Optional[User]:
    return await User.find_one({"email": email.lower()})


async def create_user(name: str, email: str, password: str, role: Role = Role.USER) -> User:
    if await get_user_by_email(email):
        raise ConflictError(USER_EXISTS_MSG)
    user = User(name=name, email=email.lower(), password=hash_password(password), role=role)
    try:
        await user.insert()
    except DuplicateKeyError as exc:
        # the unique index is authoritative when two registrations race
        raise ConflictError(USER_EXISTS_MSG) from exc
    logger.info("Registered %s account %s", role.value, user.email)
    return user


async def update_user(user: User, fields: Dict[str, Any]) -> User:
    """Apply `fields` (already filtered to what the client sent) to the user."""
    if "password" in fields:
        fields = dict(fields, password=hash_password(fields["password"]))
    if fields:
        await user.set(fields)
    return user


async def user_summaries(ids: Iterable[ObjectId], *fields: str) -> Dict[ObjectId, Dict[str, Any]]:
    return await summaries(User, ids, fields)
