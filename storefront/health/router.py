from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from storefront.health import service
from storefront.utils.rate_limit import rate_limit_health_info

router = APIRouter(prefix="/health", tags=["Health"])

@router.get("")
def health_root():
    return {"ok": True}

@router.get("/supabase")
def health_supabase():
    info = service.health_supabase_info()
    return JSONResponse(info, status_code=200 if info.get("connect_ok") else 503)

@router.get("/stripe")
def health_stripe():
    return service.health_stripe_info()

@router.get("/rate-limit")
def health_rate_limit(request: Request):
    return rate_limit_health_info(request)
