from fastapi import APIRouter, Depends, HTTPException, Request

from todos.dependencies import get_user_service
from todos.schemas.user import SignedIn, SignIn
from todos.services.user_service import UserService

router = APIRouter()


@router.post("/signin", response_model=SignedIn)
async def signin(body: SignIn, request: Request, service: UserService = Depends(get_user_service)):
    if not await service.authenticate(body.username, body.password):
        raise HTTPException(status_code=401, detail="Invalid credentials.")
    request.session["username"] = body.username
    request.session["signed_in"] = True
    return SignedIn(username=body.username)


@router.post("/signout", status_code=204)
async def signout(request: Request):
    request.session.pop("username", None)
    request.session.pop("signed_in", None)
