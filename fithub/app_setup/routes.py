from fastapi import FastAPI
from fastapi.responses import PlainTextResponse, Response
from starlette.status import HTTP_204_NO_CONTENT

def register_routes(app: FastAPI) -> None:
    """Routes racine hors routers (sonde simple et favicon)."""
    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    def root():
        return "FitHub!"

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        return Response(status_code=HTTP_204_NO_CONTENT)
