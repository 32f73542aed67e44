# hrdesk/offer_letter/router.py
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from hrdesk.auth.dependencies import require_admin
from hrdesk.config import Settings, get_settings
from hrdesk.database import get_db
from hrdesk.offer_letter.pipeline import OfferLetterError, OfferLetterPipeline, OfferLetterStepError
from hrdesk.schemas.offer_letter_schema import OfferLetterSchema

logger = logging.getLogger(__name__)

router = APIRouter(tags=["offer letter"])


def get_offer_letter_pipeline(request: Request, settings: Settings = Depends(get_settings)) -> OfferLetterPipeline:
    assets = getattr(request.app.state, "letterhead", None)
    if assets is None:
        raise RuntimeError("Letterhead assets were not loaded at startup")
    return OfferLetterPipeline(settings, assets)


@router.post("/api/employees/{emp_id}/send-offer-letter", dependencies=[Depends(require_admin)])
def send_offer_letter(
    emp_id: int,
    body: OfferLetterSchema,
    db: Session = Depends(get_db),
    pipeline: OfferLetterPipeline = Depends(get_offer_letter_pipeline),
):
    try:
        pipeline.run(db, emp_id, body.doj, body.salary_amount)
    except OfferLetterError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except OfferLetterStepError as e:
        return JSONResponse(
            status_code=500,
            content={"message": "Failed to send offer letter", "error": str(e)},
        )

    return {"message": "Offer letter sent successfully"}
