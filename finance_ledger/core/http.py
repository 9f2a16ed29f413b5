from fastapi import HTTPException, status

from finance_ledger.core.results import OperationResult

STATUS_BY_ERROR = {
    "ValidationError": status.HTTP_400_BAD_REQUEST,
    "NotFoundError": status.HTTP_404_NOT_FOUND,
    "ConsistencyError": status.HTTP_409_CONFLICT,
    "StorageError": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def unwrap(result: OperationResult):
    """Return the payload of a successful result or raise the matching HTTPException."""
    if result.success:
        return result.data
    code = STATUS_BY_ERROR.get(result.error_type, status.HTTP_500_INTERNAL_SERVER_ERROR)
    raise HTTPException(status_code=code, detail=result.error)
