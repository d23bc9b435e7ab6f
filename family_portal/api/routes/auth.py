import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from ...schemas.auth import PinLoginIn, TokenOut
from ...schemas.member import MemberOut
from ...services.member_service import authenticate_pin
from ...services.security import create_access_token
from ..deps import get_db

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/pin", response_model=TokenOut)
def pin_login(payload: PinLoginIn, db: Session = Depends(get_db)):
    member = authenticate_pin(db, member_id=payload.member_id, pin=payload.pin)
    if not member:
        logger.warning(f"PIN login failed for member {payload.member_id}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect PIN")
    return TokenOut(access_token=create_access_token(member.id), member=MemberOut.model_validate(member))
