"""Creates user accounts together with their profile documents.

The profile is the application side of a user (names, contact data,
status, admin flag), linked to the Appwrite account through `userAuthId`.
Group membership and role assignment are optional extras: they are
only created when a `groupId` is given and their collections are
configured, and failing to create them never fails the request.
"""

import re
from typing import Final, Optional

from loguru import logger
from mycad_core.appwrite import AppwriteClient, Databases, Query, Users, unique_id
from mycad_core.utils.time import isoformat_utc

from .config import AppConfig
from .exceptions import ProvisioningError, ProvisioningValidationError
from .models import (
    CreateUserRequest,
    Document,
    EnsuredProfile,
    EnsureProfileRequest,
    ProfileRequest,
    ProvisionedUser,
    to_text,
)

MIN_PHONE_DIGITS: Final = 7
MAX_PHONE_DIGITS: Final = 15
NON_DIGITS = re.compile(r"[^0-9]")


def normalize_phone(value: str) -> Optional[str]:
    """Returns the phone number as `+` followed by its digits.

    Numbers must start with `+` and have 7 to 15 digits; separators are
    dropped. Anything else yields None.

    >>> normalize_phone("+52 (55) 1234-5678")
    '+525512345678'
    >>> normalize_phone("5512345678") is None
    True
    """
    value = value.strip()
    if not value.startswith("+"):
        return None
    digits = NON_DIGITS.sub("", value[1:])
    if not MIN_PHONE_DIGITS <= len(digits) <= MAX_PHONE_DIGITS:
        return None
    return f"+{digits}"


def split_name(full_name: str) -> tuple[str, str]:
    """Splits a full name into first name and the rest.

    >>> split_name("  Ana  María López ")
    ('Ana', 'María López')
    """
    parts = [p for p in full_name.strip().split(" ") if p]
    if not parts:
        return "", ""
    return parts[0], " ".join(parts[1:])


def resolve_names(request: ProfileRequest, full_name: str) -> tuple[str, str]:
    """Explicit first/last names take precedence over the split full name."""
    first_name, last_name = split_name(full_name)
    return request.first_name or first_name, request.last_name or last_name


def profile_data(
    request: ProfileRequest,
    user_auth_id: str,
    email: str,
    first_name: str,
    last_name: str,
    phone: Optional[str],
) -> Document:
    data = {
        "userAuthId": user_auth_id,
        "email": email,
        "username": request.username or None,
        "firstName": first_name,
        "lastName": last_name,
        "phone": phone or None,
        "avatarFileId": request.avatar_file_id or None,
        "isPlatformAdmin": request.is_platform_admin,
        "status": request.status,
        "enabled": request.enabled,
    }
    return {k: v for k, v in data.items() if v is not None}


class ProfileProvisioner:
    def __init__(self, client: AppwriteClient, config: AppConfig) -> None:
        self.config = config
        self.databases = Databases(client)
        self.users = Users(client)

    async def find_profile(self, user_auth_id: str) -> Optional[Document]:
        cfg = self.config
        res = await self.databases.list_documents(
            cfg.database_id,
            cfg.collection_users_profile,
            [Query.equal("userAuthId", user_auth_id), Query.limit(1)],
        )
        return res.documents[0] if res.documents else None

    async def create_profile(self, data: Document) -> Document:
        cfg = self.config
        return await self.databases.create_document(
            cfg.database_id, cfg.collection_users_profile, unique_id(), data
        )

    async def find_group(self, team_id: str) -> Optional[str]:
        """Returns the ID of the group document of a team, if there is one."""
        cfg = self.config
        if not cfg.collection_groups:
            return None
        res = await self.databases.list_documents(
            cfg.database_id,
            cfg.collection_groups,
            [Query.equal("teamId", team_id), Query.limit(1)],
        )
        if not res.documents:
            return None
        return res.documents[0]["$id"]

    async def add_membership(
        self, request: CreateUserRequest, profile_id: str
    ) -> Optional[Document]:
        """Adds the profile to the group given by `groupId` (a team ID).

        Failures are logged and yield no membership.
        """
        cfg = self.config
        if not (request.group_id and cfg.collection_group_members):
            return None
        logger.info(f"Creating group membership for teamId: {request.group_id}")
        data: Document = {
            "groupId": request.group_id,
            "profileId": profile_id,
            "role": request.role or cfg.default_group_role,
            "enabled": True,
            "joinedAt": isoformat_utc(),
            "notes": request.notes,
            "profile": profile_id,
        }
        try:
            group_doc_id = await self.find_group(request.group_id)
            if group_doc_id:
                data["group"] = group_doc_id
            member = await self.databases.create_document(
                cfg.database_id, cfg.collection_group_members, unique_id(), data
            )
        except Exception as e:
            logger.warning(f"Failed to create group membership: {e}")
            return None
        logger.info(f"Group membership created: {member['$id']}")
        return member

    async def assign_role(
        self, request: CreateUserRequest, profile_id: str
    ) -> Optional[Document]:
        """Assigns `roleId` (or the default role) within the group.

        Failures are logged and yield no assignment.
        """
        cfg = self.config
        role_id = request.role_id or cfg.default_role_id
        if not (request.group_id and cfg.collection_user_roles and role_id):
            return None
        logger.info("Creating user role assignment...")
        try:
            user_role = await self.databases.create_document(
                cfg.database_id,
                cfg.collection_user_roles,
                unique_id(),
                {
                    "groupId": request.group_id,
                    "profileId": profile_id,
                    "profile": profile_id,
                    "roleId": role_id,
                    "enabled": True,
                    "assignedAt": isoformat_utc(),
                },
            )
        except Exception as e:
            logger.warning(f"Failed to assign role: {e}")
            return None
        logger.info(f"User role assigned: {user_role['$id']}")
        return user_role

    async def create_user_with_profile(
        self, request: CreateUserRequest
    ) -> ProvisionedUser:
        """Creates the account, its profile and the optional group records.

        Names are validated before anything is created.

        Raises
        ------
        `ProvisioningValidationError`
            If email, password or name is missing, or no last name can
            be derived.
        `ProvisioningError`
            If the account or profile could not be created. Carries the
            IDs of what was created before the failure.
        """
        if not (request.email and request.password and request.name):
            raise ProvisioningValidationError("email, password, name are required")
        first_name, last_name = resolve_names(request, request.name)
        if not (first_name and last_name):
            raise ProvisioningValidationError("firstName and lastName are required")
        # invalid numbers are dropped, not rejected
        phone = normalize_phone(request.phone) if request.phone else None

        user: Optional[Document] = None
        profile: Optional[Document] = None
        try:
            logger.info("Creating Auth user...")
            user = await self.users.create(
                unique_id(), request.email, phone, request.password, request.name
            )
            logger.info(f"Auth user created: {user['$id']}")
            profile = await self.create_profile(
                profile_data(
                    request, user["$id"], request.email, first_name, last_name, phone
                )
            )
            logger.info(f"Profile created: {profile['$id']}")
        except Exception as e:
            raise ProvisioningError(
                str(e) or e.__class__.__name__,
                user_id=user["$id"] if user else None,
                profile_id=profile["$id"] if profile else None,
            ) from e

        return ProvisionedUser(
            user=user,
            profile=profile,
            group_member=await self.add_membership(request, profile["$id"]),
            user_role=await self.assign_role(request, profile["$id"]),
        )

    async def ensure_profile(self, request: EnsureProfileRequest) -> EnsuredProfile:
        """Returns the profile of an account, creating it if it doesn't exist.

        Missing names and email are taken from the Appwrite account.

        Raises
        ------
        `ProvisioningValidationError`
            If `userAuthId` is missing, or no first and last name can be
            derived for a new profile.
        `AppwriteError`
            If the account does not exist.
        """
        user_auth_id = request.user_auth_id
        if not user_auth_id:
            raise ProvisioningValidationError("userAuthId is required")

        existing = await self.find_profile(user_auth_id)
        if existing is not None:
            return EnsuredProfile(created=False, profile=existing)

        user = await self.users.get(user_auth_id)
        first_name, last_name = resolve_names(
            request, to_text(user.get("name")) or request.name
        )
        if not (first_name and last_name):
            raise ProvisioningValidationError(
                "firstName and lastName are required "
                "(provide them or include them in Auth user name)"
            )
        email = (to_text(user.get("email")) or request.email).lower()
        profile = await self.create_profile(
            profile_data(request, user_auth_id, email, first_name, last_name, request.phone)
        )
        logger.info(f"Profile created for {user_auth_id}: {profile['$id']}")
        return EnsuredProfile(created=True, profile=profile)
