"""Transaction history endpoints."""

from fastapi import APIRouter, Depends

from dividend_tracker.api.deps import get_current_user, get_ledger_service
from dividend_tracker.api.schemas import TransactionResponse
from dividend_tracker.domain.models import User
from dividend_tracker.services import LedgerService

router = APIRouter(prefix="/api/transactions", tags=["transactions"])


@router.get("", response_model=list[TransactionResponse])
def list_transactions(
    user: User = Depends(get_current_user),
    ledger: LedgerService = Depends(get_ledger_service),
) -> list[TransactionResponse]:
    """All BUY/SELL transactions, newest first."""
    return [
        TransactionResponse.model_validate(t)
        for t in ledger.list_transactions(user.user_id)
    ]


@router.get("/{ticker}", response_model=list[TransactionResponse])
def list_transactions_for_ticker(
    ticker: str,
    user: User = Depends(get_current_user),
    ledger: LedgerService = Depends(get_ledger_service),
) -> list[TransactionResponse]:
    """Transactions for one ticker."""
    return [
        TransactionResponse.model_validate(t)
        for t in ledger.list_transactions(user.user_id, ticker)
    ]
