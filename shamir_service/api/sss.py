"""Shamir Secret Sharing API routes.

Thin transport over :class:`SecretSharingService`: request bodies are parsed
into integers, service errors become 400 responses carrying the error code.
Large integers (secret, share y) may be sent as JSON numbers or decimal
strings and are always returned as decimal strings.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from shamir_service.core.errors import SecretSharingError
from shamir_service.core.share import Share
from shamir_service.core.sharing_service import SecretSharingService, get_sharing_service

router = APIRouter(prefix="/api/sss", tags=["sss"])

SharingService = Annotated[SecretSharingService, Depends(get_sharing_service)]


# ============================================================================
# Schemas
# ============================================================================

class ShareIn(BaseModel):
    """A share submitted for reconstruction."""
    x: int = Field(..., ge=1, description="Share index")
    y: int = Field(..., ge=0, description="Share value in [0, prime), integer or decimal string; not reduced")


class ShareOut(BaseModel):
    """A share as returned to clients."""
    x: int
    y: str = Field(..., description="Share value (decimal string)")

    @classmethod
    def from_share(cls, share: Share) -> "ShareOut":
        return cls(x=share.x, y=str(share.y))


class SplitRequest(BaseModel):
    """Split request."""
    secret: int = Field(..., description="Secret to split, 0 <= secret < prime")
    k: int = Field(..., description="Minimum shares needed to reconstruct")
    n: int = Field(..., description="Total shares to generate")


class SplitResponse(BaseModel):
    """Split response."""
    model_config = ConfigDict(populate_by_name=True)

    message: str = "Secret split successfully"
    threshold: int
    total_shares: int = Field(..., alias="totalShares")
    shares: list[ShareOut]


class ReconstructRequest(BaseModel):
    """Reconstruct request."""
    shares: list[ShareIn]
    k: int | None = Field(default=None, description="Threshold the shares were split with")


class ReconstructResponse(BaseModel):
    """Reconstruct response."""
    message: str = "Secret reconstructed successfully"
    secret: str = Field(..., description="Reconstructed secret (decimal string)")


class RecoverShareRequest(BaseModel):
    """Recover share request."""
    shares: list[ShareIn]
    x: int = Field(..., ge=1, description="Index of the share to regenerate")
    k: int | None = None


class RecoverShareResponse(BaseModel):
    """Recover share response."""
    message: str = "Share recovered successfully"
    share: ShareOut


def _bad_request(error: SecretSharingError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"error": error.code, "message": str(error)},
    )


# ============================================================================
# Routes
# ============================================================================

@router.get("/info")
def sss_info(service: SharingService):
    """Describe the algorithm, field modulus and available routes."""
    info = service.info()
    info["usage"] = {
        "split": f"POST {router.prefix}/split",
        "reconstruct": f"POST {router.prefix}/reconstruct",
        "recover_share": f"POST {router.prefix}/recover-share",
    }
    return info


@router.post("/split", response_model=SplitResponse)
def sss_split(data: SplitRequest, service: SharingService):
    """Split a secret into n shares, any k of which reconstruct it.

    k - 1 shares reveal nothing about the secret.
    """
    try:
        result = service.split(data.secret, threshold=data.k, total_shares=data.n)
    except SecretSharingError as e:
        raise _bad_request(e)

    return SplitResponse(
        threshold=result.threshold,
        total_shares=result.total_shares,
        shares=[ShareOut.from_share(s) for s in result.shares],
    )


@router.post("/reconstruct", response_model=ReconstructResponse)
def sss_reconstruct(data: ReconstructRequest, service: SharingService):
    """Reconstruct a secret from shares.

    Shares from a different split, or fewer than the original threshold,
    produce a value that is not the secret; this cannot be detected.
    """
    try:
        result = service.reconstruct(
            [Share(x=s.x, y=s.y) for s in data.shares],
            threshold=data.k,
        )
    except SecretSharingError as e:
        raise _bad_request(e)

    return ReconstructResponse(secret=str(result.secret))


@router.post("/recover-share", response_model=RecoverShareResponse)
def sss_recover_share(data: RecoverShareRequest, service: SharingService):
    """Regenerate a lost share from existing shares."""
    try:
        share = service.recover_share(
            [Share(x=s.x, y=s.y) for s in data.shares],
            x=data.x,
            threshold=data.k,
        )
    except SecretSharingError as e:
        raise _bad_request(e)

    return RecoverShareResponse(share=ShareOut.from_share(share))
