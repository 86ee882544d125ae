import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with every repository the auth flows touch"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)
    uow.users.update_password = AsyncMock()
    uow.users.mark_email_as_verified = AsyncMock()
    uow.users.update_session_status = AsyncMock()
    uow.users.attempt_auto_verification = AsyncMock(return_value=False)

    uow.accounts = MagicMock()
    uow.accounts.get_by_provider_account = AsyncMock(return_value=None)
    uow.accounts.get_by_user_and_provider = AsyncMock(return_value=None)
    uow.accounts.get_by_user_id = AsyncMock(return_value=[])
    uow.accounts.create = AsyncMock(side_effect=lambda account: account)

    uow.refresh_tokens = MagicMock()
    uow.refresh_tokens.create = AsyncMock(side_effect=lambda token: token)
    uow.refresh_tokens.get_by_token_hash = AsyncMock(return_value=None)
    uow.refresh_tokens.delete_by_token_hash = AsyncMock(return_value=1)
    uow.refresh_tokens.count_valid_by_user_id = AsyncMock(return_value=1)
    uow.refresh_tokens.delete_by_user_id = AsyncMock(return_value=0)
    uow.refresh_tokens.delete_all = AsyncMock(return_value=0)
    uow.refresh_tokens.delete_expired = AsyncMock(return_value=0)

    uow.password_reset_tokens = MagicMock()
    uow.password_reset_tokens.replace_for_email = AsyncMock(side_effect=lambda token: token)
    uow.password_reset_tokens.get_by_token_hash = AsyncMock(return_value=None)
    uow.password_reset_tokens.delete_by_token_hash = AsyncMock(return_value=1)
    uow.password_reset_tokens.delete_expired = AsyncMock(return_value=0)

    uow.email_verification_tokens = MagicMock()
    uow.email_verification_tokens.replace_for_identifier = AsyncMock(
        side_effect=lambda token: token
    )
    uow.email_verification_tokens.get_by_token_hash = AsyncMock(return_value=None)
    uow.email_verification_tokens.delete_by_token_hash = AsyncMock(return_value=1)
    uow.email_verification_tokens.delete_expired = AsyncMock(return_value=0)

    uow.login_codes = MagicMock()
    uow.login_codes.replace_for_email = AsyncMock(side_effect=lambda code: code)
    uow.login_codes.get_by_email = AsyncMock(return_value=None)
    uow.login_codes.increment_attempts = AsyncMock(return_value=1)
    uow.login_codes.delete_by_email = AsyncMock(return_value=1)
    uow.login_codes.delete_expired = AsyncMock(return_value=0)

    return uow


@pytest.fixture
def mock_notifications():
    notifications = MagicMock()
    notifications.send_welcome_email = AsyncMock()
    notifications.send_password_reset_email = AsyncMock()
    notifications.send_email_verification = AsyncMock()
    notifications.send_login_code_email = AsyncMock()
    notifications.send_notification = AsyncMock()
    return notifications
