from fastapi import APIRouter, Request, Response

router = APIRouter()


@router.get("/healthz")
async def healthz(request: Request):
    engine = request.app.state.engine
    if engine.running:
        return {"status": "ok"}
    return Response(status_code=503, content="poller not running")


@router.get("/readyz")
async def readyz(request: Request):
    if request.app.state.engine.ready_event.is_set():
        return {"status": "ready"}
    return Response(status_code=503, content="loading")
