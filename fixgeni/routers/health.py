from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

# None of these touch the store: platform health checks must pass while the DB is down.
router = APIRouter(tags=["health"])

@router.get("/health", response_class=PlainTextResponse)
def health():
    return "ok"

@router.get("/_health")
def health_json():
    return {"ok": True}

@router.get("/", response_class=PlainTextResponse)
def root():
    return "FixGeni API is running"
