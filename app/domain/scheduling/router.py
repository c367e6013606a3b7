"""Scheduling router - FastAPI endpoints for recurring job generation"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import GenerateJobsRequest, GenerateJobsResponse
from .service import JobGenerationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/companies/{company_id}/contracts", tags=["Scheduling"])


def get_job_generation_service(db: Session = Depends(get_db)) -> JobGenerationService:
    """Dependency injection for JobGenerationService"""
    return JobGenerationService(db)


@router.post("/{contract_id}/generate-jobs", response_model=GenerateJobsResponse)
def generate_jobs(
    company_id: int,
    contract_id: int,
    data: GenerateJobsRequest,
    service: JobGenerationService = Depends(get_job_generation_service),
):
    """Generate recurring jobs from a contract's weekly schedule"""
    logger.info(
        f"📅 Generating jobs for contract {contract_id} (company {company_id}, "
        f"{data.weeksAhead} weeks ahead)"
    )
    return service.generate_jobs(company_id, contract_id, data)
