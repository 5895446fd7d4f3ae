from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["Root"])


@router.get("/", response_class=PlainTextResponse, summary="API banner")
async def root() -> str:
    return "Student Management API is running"
