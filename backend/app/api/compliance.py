"""
Compliance API routes.
Scores a client's registration and filing standing.
"""

from dataclasses import asdict

from fastapi import APIRouter

from app.schemas.schemas import ComplianceScoreRequest
from app.core.compliance import ComplianceScorer, ClientData, Filing

router = APIRouter()
scorer = ComplianceScorer()


@router.post("/score")
async def score_client(data: ComplianceScoreRequest):
    """Calculate a 0-100 compliance score with per-check breakdown."""
    client = ClientData(
        tin_number=data.tin_number,
        nis_number=data.nis_number,
        vat_number=data.vat_number,
        business_registration=data.business_registration,
        filings=[Filing(type=f.type, status=f.status, due_date=f.due_date) for f in data.filings],
    )
    result = scorer.calculate(client, today=data.as_of)
    return asdict(result)
