"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.

Validation outcomes (not found, inactive, expired, machine mismatch)
are not exceptions; they are returned as ValidationResult values.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class UpstreamUnavailableError(DomainException):
    """Raised when the store or identity directory cannot be reached."""

    def __init__(self, message: str = "Upstream service unavailable"):
        super().__init__(message, code="UPSTREAM_UNAVAILABLE")


class LicenseException(DomainException):
    """Base exception for license-related errors."""

    pass


class NotOwnedError(LicenseException):
    """
    Raised when a caller resets a license it does not own.

    Also covers keys that do not exist, so existence is never leaked.
    """

    def __init__(self, message: str = "License not found or not owned by you."):
        super().__init__(message, code="NOT_OWNED")


class LicenseKeyConflictError(LicenseException):
    """Raised by the store when a generated key already exists."""

    def __init__(self, message: str = "License key already exists"):
        super().__init__(message, code="LICENSE_KEY_CONFLICT")


class DuplicatePurchaseReferenceError(LicenseException):
    """Raised by the store when a purchase reference was already recorded."""

    def __init__(self, message: str = "Purchase reference already recorded"):
        super().__init__(message, code="DUPLICATE_PURCHASE_REFERENCE")


class PurchaseRevokedError(LicenseException):
    """Raised when a replayed purchase points at a revoked license."""

    def __init__(self, message: str = "License for this purchase was revoked"):
        super().__init__(message, code="PURCHASE_REVOKED")


class IssuanceExhaustedError(LicenseException):
    """Raised when key generation keeps colliding after bounded retries."""

    def __init__(self, message: str = "Could not generate a unique license key"):
        super().__init__(message, code="ISSUANCE_EXHAUSTED")


class AccountException(DomainException):
    """Base exception for identity and administration errors."""

    pass


class AdminRequiredError(AccountException):
    """Raised when a non-admin calls an admin-only operation."""

    def __init__(self, message: str = "Forbidden: admin only."):
        super().__init__(message, code="ADMIN_REQUIRED")


class IdentityNotFoundError(AccountException):
    """Raised when a target identity is not in the directory."""

    def __init__(self, message: str = "Target user not found."):
        super().__init__(message, code="IDENTITY_NOT_FOUND")


class InvalidRevocationTargetError(AccountException):
    """Raised when neither a user id nor an email was given."""

    def __init__(self, message: str = "Provide user_id or email."):
        super().__init__(message, code="INVALID_REVOCATION_TARGET")


class SelfRevocationError(AccountException):
    """Raised when an admin targets their own account."""

    def __init__(self, message: str = "You cannot delete your own admin account from here."):
        super().__init__(message, code="SELF_REVOCATION")


class RevocationIncompleteError(AccountException):
    """
    Raised when a revocation step fails partway.

    Carries the progress made so far. Every step is idempotent,
    so the caller can re-invoke revocation to finish it.
    """

    def __init__(self, progress, failed_step: str, message: str = None):
        super().__init__(
            message or f"Revocation stopped at step '{failed_step}'",
            code="REVOCATION_INCOMPLETE",
        )
        self.progress = progress
        self.failed_step = failed_step


class BetaSignupNotFoundError(AccountException):
    """Raised when a beta signup is not found."""

    def __init__(self, message: str = "Beta signup not found"):
        super().__init__(message, code="BETA_SIGNUP_NOT_FOUND")


class DuplicateSignupError(AccountException):
    """Raised when an email is already on the beta list."""

    def __init__(self, message: str = "This email is already on the beta list!"):
        super().__init__(message, code="DUPLICATE_SIGNUP")
