"""
Authentication operations for the records API.

Handles login and session teardown. The API issues a bearer token on login;
there is no server-side logout, so logging out discards the token.
"""

import os
import logging
from typing import Dict, Any, Optional

import requests  # type: ignore

from .client import APIClient


class AuthAPI(APIClient):
    """API client with authentication capabilities."""

    logger: logging.Logger

    def __init__(
        self,
        base_url: str,
        email: Optional[str] = None,
        password: Optional[str] = None,
        timeout: int = 30,
        max_retries: int = 3,
        verify_ssl: bool = True,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize API client with authentication.

        Args:
            base_url: Base URL for the API
            email: Account email
            password: Account password
            timeout: Request timeout in seconds
            max_retries: Maximum number of retry attempts
            verify_ssl: Whether to verify SSL certificates
            logger: Logger instance
        """
        super().__init__(base_url, timeout, max_retries, verify_ssl, logger)

        self.email = email or os.getenv("API_EMAIL")
        self.password = password or os.getenv("API_PASSWORD")

    def login(self) -> Dict[str, Any]:
        """
        Login with email and password.

        Returns:
            User data from successful login

        Raises:
            ValueError: If credentials are missing or no token is returned
            requests.exceptions.RequestException: On login failure
        """
        self.logger.info("Logging in to records API")

        if not self.email or not self.password:
            raise ValueError("Email and password are required for authentication")

        try:
            response = self._make_request(
                "POST",
                "/auth/login",
                skip_auth_check=True,
                json={"email": self.email, "password": self.password}
            )
            body = response.json() or {}

            self.token = body.get("token")
            if not self.token:
                self.logger.error("No token received in login response")
                raise ValueError("No token received in login response")

            self.user_data = body.get("user") or {}
            self.is_authenticated = True
            self._update_headers()

            self.logger.info(f"Successfully logged in as {self.user_data.get('email', self.email)}")
            return self.user_data

        except requests.exceptions.RequestException as e:
            self.logger.error(f"Login failed: {e}")
            self.is_authenticated = False
            raise

    def logout(self) -> None:
        """Discard the session token."""
        if not self.is_authenticated:
            self.logger.warning("Not authenticated, skipping logout")
            return

        self.is_authenticated = False
        self.token = None
        self.user_data = None
        self._update_headers()
        self.logger.info("Logged out")

    def close(self) -> None:
        """Close the session and logout if authenticated."""
        if self.is_authenticated:
            self.logout()
        super().close()
