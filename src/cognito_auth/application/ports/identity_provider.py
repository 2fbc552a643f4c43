from abc import ABC, abstractmethod
from typing import Any


class IdentityProvider(ABC):
    """Port for Cognito user pool operations

    Implementations fill in the app client and pool identifiers and return
    the provider's raw response dictionaries.
    """

    @abstractmethod
    def admin_initiate_auth(self, auth_flow: str, auth_parameters: dict[str, str]) -> dict[str, Any]:
        """Start an authentication dialog (password or refresh token flow)"""
        pass

    @abstractmethod
    def respond_to_auth_challenge(
        self, challenge_name: str, challenge_responses: dict[str, str], session: str | None
    ) -> dict[str, Any]:
        """Answer a challenge returned by a previous dialog step"""
        pass

    @abstractmethod
    def change_password(self, access_token: str, previous_password: str, proposed_password: str) -> None:
        """Change the signed-in user's password"""
        pass

    @abstractmethod
    def sign_up(
        self,
        username: str,
        password: str,
        secret_hash: str,
        user_attributes: list[dict[str, str]],
    ) -> dict[str, Any]:
        """Register a new user"""
        pass

    @abstractmethod
    def confirm_sign_up(self, username: str, confirmation_code: str, secret_hash: str) -> None:
        """Confirm a registration with the delivered code"""
        pass

    @abstractmethod
    def resend_confirmation_code(self, username: str, secret_hash: str) -> dict[str, Any]:
        """Resend the registration confirmation code"""
        pass

    @abstractmethod
    def forgot_password(self, username: str, secret_hash: str) -> dict[str, Any]:
        """Start the forgotten password flow"""
        pass

    @abstractmethod
    def confirm_forgot_password(
        self, username: str, confirmation_code: str, password: str, secret_hash: str
    ) -> None:
        """Set a new password with the delivered reset code"""
        pass

    @abstractmethod
    def delete_user(self, access_token: str) -> None:
        """Delete the signed-in user"""
        pass
