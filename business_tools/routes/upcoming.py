from fastapi import APIRouter
from fastapi.responses import JSONResponse

router = APIRouter(tags=["coming soon"])


def _under_development(message: str) -> JSONResponse:
    return JSONResponse(
        content={"message": message, "status": "under_development"},
        status_code=501,
    )


# The body is never read, so any payload (or none) gets the same answer.
@router.post("/competitor")
def competitor_analysis():
    return _under_development("Competitor analysis coming soon!")


@router.post("/personas")
def customer_personas():
    return _under_development("Customer personas generator coming soon!")
