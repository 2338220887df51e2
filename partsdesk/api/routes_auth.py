from fastapi import APIRouter

from partsdesk.api.dependencies import CurrentIdentityDep

router = APIRouter(tags=["auth"])


@router.get("/me")
def me(identity: CurrentIdentityDep):
    """Identity carried by the caller's bearer token."""
    return {"user": identity.to_dict()}
