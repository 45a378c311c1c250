"""Domain value objects for workspace admission.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum

from pydantic import field_validator
from pydantic.networks import validate_email

from hadik.domain.value.common import RootValueObject, ValueObject
from hadik.domain.value.identifiers import UserId


class Role(str, Enum):
    """Workspace roles.

    No total order of privilege is assumed. ADMIN is a superuser.
    """

    ADMIN = "ADMIN"
    RESEARCHER = "RESEARCHER"
    ANNOTATOR = "ANNOTATOR"
    VIEWER = "VIEWER"


class Permission(str, Enum):
    """Permission keys of the role-permission matrix."""

    MANAGE_MODELS = "Manage Models"
    TRAINING_ACCESS = "Training Access"
    DATASET_LABELING = "Dataset Labeling"
    API_KEYS = "API Keys"
    USER_MGMT = "User Mgmt"
    DEPLOYMENT = "Deployment"


PERMISSION_DESCRIPTIONS: dict[Permission, str] = {
    Permission.MANAGE_MODELS: "Create, edit and delete model configurations",
    Permission.TRAINING_ACCESS: "Launch and monitor training jobs",
    Permission.DATASET_LABELING: "Annotate and label dataset entries",
    Permission.API_KEYS: "Generate and revoke API credentials",
    Permission.USER_MGMT: "Invite, remove and manage team members",
    Permission.DEPLOYMENT: "Deploy models to production endpoints",
}


class JoinRequestStatus(str, Enum):
    """Status of a join request. Transitions only leave PENDING."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    DENIED = "denied"


class InvitationStatus(str, Enum):
    """Derived status of an invitation, never stored."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    EXPIRED = "expired"


class LoginOutcome(str, Enum):
    """Result of a login/signup attempt."""

    AUTHENTICATED = "authenticated"
    ACCOUNT_CREATED = "account_created"
    JOIN_REQUEST_SUBMITTED = "join_request_submitted"
    ALREADY_PENDING = "already_pending"
    ALREADY_ACCEPTED_AWAITING_PASSWORD = "already_accepted_awaiting_password"
    DENIED = "denied"
    RATE_LIMITED = "rate_limited"
    INVALID_INPUT = "invalid_input"
    # Store or transport failure; never a negative admission decision
    ERROR = "error"


class InvitationStep(str, Enum):
    """Steps of the token-based invitation acceptance flow."""

    LOADING = "loading"
    AVATAR_SELECTION = "avatar_selection"
    SIGNUP_FORM = "signup_form"
    ACCEPTING = "accepting"
    DONE = "done"
    INVALID_TOKEN = "invalid_token"
    EXPIRED = "expired"
    ALREADY_ACCEPTED = "already_accepted"


class AuditAction(str, Enum):
    """Actions recorded in the audit log."""

    JOIN_REQUEST_SUBMITTED = "JOIN_REQUEST_SUBMITTED"
    JOIN_REQUEST_ACCEPTED = "JOIN_REQUEST_ACCEPTED"
    JOIN_REQUEST_DENIED = "JOIN_REQUEST_DENIED"
    ACCOUNT_CREATED = "ACCOUNT_CREATED"
    PROFILE_BACKFILLED = "PROFILE_BACKFILLED"
    MEMBER_INVITED = "MEMBER_INVITED"
    INVITATION_CANCELLED = "INVITATION_CANCELLED"
    INVITATION_ACCEPTED = "INVITATION_ACCEPTED"
    ROLE_CHANGED = "ROLE_CHANGED"
    USER_DELETED = "USER_DELETED"
    PERMISSIONS_SAVED = "PERMISSIONS_SAVED"
    PASSWORD_SET = "PASSWORD_SET"
    AUDIT_ARCHIVED = "AUDIT_ARCHIVED"


# Avatar catalogue offered during invitation signup
AVATARS: tuple[str, ...] = (
    "https://api.dicebear.com/7.x/avataaars/svg?seed=Felix",
    "https://api.dicebear.com/7.x/avataaars/svg?seed=Aneka",
    "https://api.dicebear.com/7.x/avataaars/svg?seed=Scooby",
    "https://api.dicebear.com/7.x/avataaars/svg?seed=Troubel",
    "https://api.dicebear.com/7.x/avataaars/svg?seed=Bandit",
    "https://api.dicebear.com/7.x/avataaars/svg?seed=Misty",
)


class Email(RootValueObject[str]):
    """Case-folded e-mail address.

    Surrounding whitespace is stripped and the address lower-cased, so two
    spellings of the same mailbox compare equal.
    """

    @field_validator("root")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Validate with email-validator, then case-fold.

        Display-name forms ("Bob <bob@x.com>") are rejected; only a bare
        mailbox is an identity.
        """
        candidate = v.strip()
        if "<" in candidate or len(candidate) > 254:
            raise ValueError(f"Invalid email address: {v!r}")
        _, normalized = validate_email(candidate)
        return normalized.lower()


class InviteToken(RootValueObject[str]):
    """URL-safe invitation token."""

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        """Validate token is not empty."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Token must be 1-255 characters")
        return v

    def redacted(self) -> str:
        """Token prefix safe for logs."""
        return self.root[:8] + "..."


class IdentitySession(ValueObject):
    """An authenticated Identity Store session.

    The access token is opaque to this service; it is only handed back to the
    Identity Store (set_password, get_current_session).
    """

    access_token: str
    refresh_token: str | None = None
    user_id: UserId
    email: Email
