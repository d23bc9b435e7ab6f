from fastapi import APIRouter
from . import auth, members, tasks, rewards, logs

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["Auth"])
router.include_router(members.router, prefix="/members", tags=["Members"])
router.include_router(tasks.router, prefix="/tasks", tags=["Tasks"])
router.include_router(rewards.router, prefix="/rewards", tags=["Rewards"])
router.include_router(logs.router, prefix="/logs", tags=["Logs"])
