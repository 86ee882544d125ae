from datetime import timedelta
from uuid import uuid4

import pytest

from servicedesk_auth.app.services.notification_gateway import NotificationDeliveryError
from servicedesk_auth.app.services.token_service import TokenService
from servicedesk_auth.app.use_cases.auth import (
    SendEmailVerificationUseCase,
    VerifyEmailUseCase,
)
from servicedesk_auth.domain.base import utcnow
from servicedesk_auth.domain.entities import EmailVerificationToken, User

VERIFICATION_TOKEN = "c" * 64


@pytest.fixture
def user():
    return User(id=uuid4(), email="v@x.com", firstname="Vic")


def stored_verification_token(expires_in=timedelta(hours=24)):
    return EmailVerificationToken(
        identifier="v@x.com",
        token_hash=TokenService.hash_token(VERIFICATION_TOKEN),
        expires_at=utcnow() + expires_in,
    )


@pytest.mark.asyncio
async def test_send_verification(mock_uow, mock_notifications, user):
    mock_uow.users.get_by_email.return_value = user
    use_case = SendEmailVerificationUseCase(mock_uow, mock_notifications)

    result = await use_case.execute("v@x.com")

    assert result.is_ok()
    stored = mock_uow.email_verification_tokens.replace_for_identifier.call_args[0][0]
    sent_token = mock_notifications.send_email_verification.call_args[0][2]
    assert stored.identifier == "v@x.com"
    assert stored.token_hash == TokenService.hash_token(sent_token)
    assert stored.expires_at > utcnow() + timedelta(hours=23)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_send_verification_already_verified(mock_uow, mock_notifications, user):
    user.email_verified_at = utcnow()
    mock_uow.users.get_by_email.return_value = user
    use_case = SendEmailVerificationUseCase(mock_uow, mock_notifications)

    result = await use_case.execute("v@x.com")

    assert result.is_err()
    assert result.error.code == "BAD_REQUEST"
    mock_notifications.send_email_verification.assert_not_called()


@pytest.mark.asyncio
async def test_send_verification_unknown_email(mock_uow, mock_notifications):
    use_case = SendEmailVerificationUseCase(mock_uow, mock_notifications)

    result = await use_case.execute("nobody@x.com")

    assert result.is_err()
    assert result.error.code == "NOT_FOUND"


@pytest.mark.asyncio
async def test_send_verification_delivery_failure(mock_uow, mock_notifications, user):
    mock_uow.users.get_by_email.return_value = user
    mock_notifications.send_email_verification.side_effect = NotificationDeliveryError("down")
    use_case = SendEmailVerificationUseCase(mock_uow, mock_notifications)

    result = await use_case.execute("v@x.com")

    assert result.is_err()
    assert result.error.code == "BAD_REQUEST"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_verify_email(mock_uow, mock_notifications, user):
    # Arrange
    mock_uow.email_verification_tokens.get_by_token_hash.return_value = (
        stored_verification_token()
    )
    mock_uow.users.get_by_email.return_value = user
    use_case = VerifyEmailUseCase(mock_uow, mock_notifications)

    # Act
    result = await use_case.execute(VERIFICATION_TOKEN)

    # Assert
    assert result.is_ok()
    mock_uow.users.mark_email_as_verified.assert_called_once_with(user.id)
    mock_uow.email_verification_tokens.delete_by_token_hash.assert_called_once()
    mock_uow.users.attempt_auto_verification.assert_called_once_with(user.id)
    mock_uow.commit.assert_called_once()
    mock_notifications.send_notification.assert_called_once()


@pytest.mark.asyncio
async def test_verify_email_invalid_token(mock_uow, mock_notifications):
    use_case = VerifyEmailUseCase(mock_uow, mock_notifications)

    result = await use_case.execute(VERIFICATION_TOKEN)

    assert result.is_err()
    assert result.error.code == "BAD_REQUEST"
    mock_uow.users.mark_email_as_verified.assert_not_called()


@pytest.mark.asyncio
async def test_verify_email_expired_token(mock_uow, mock_notifications):
    mock_uow.email_verification_tokens.get_by_token_hash.return_value = (
        stored_verification_token(expires_in=timedelta(seconds=-5))
    )
    use_case = VerifyEmailUseCase(mock_uow, mock_notifications)

    result = await use_case.execute(VERIFICATION_TOKEN)

    assert result.is_err()
    assert result.error.code == "BAD_REQUEST"
    mock_uow.email_verification_tokens.delete_by_token_hash.assert_called_once()
    mock_uow.users.mark_email_as_verified.assert_not_called()


@pytest.mark.asyncio
async def test_verify_email_user_missing(mock_uow, mock_notifications):
    mock_uow.email_verification_tokens.get_by_token_hash.return_value = (
        stored_verification_token()
    )
    use_case = VerifyEmailUseCase(mock_uow, mock_notifications)

    result = await use_case.execute(VERIFICATION_TOKEN)

    assert result.is_err()
    assert result.error.code == "NOT_FOUND"
