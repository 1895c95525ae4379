from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.api.routes.auth import raise_for_error
from src.app.services.token_issuer import TokenClaims
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users import LoadProfileUseCase, ProfileResponse
from src.depends import get_current_account, get_unit_of_work

router = APIRouter(prefix="/auth", tags=["User"])


@router.get("/me", status_code=status.HTTP_200_OK, response_model=ProfileResponse)
async def get_me(
    claims: TokenClaims = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Load the account behind the bearer session token.

    Raises:
        - 401 Unauthorized: Missing, invalid or expired token, or a reset token
        - 404 Not Found: Account no longer exists
    """
    result = await LoadProfileUseCase(uow).execute(UUID(claims.account_id))
    if result.is_err():
        raise_for_error(result.error)

    return result.value
