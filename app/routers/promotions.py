from typing import Callable, List, Optional

from fastapi import APIRouter, Depends

from app.dependencies import get_repository, get_state_writer
from app.schemas.promotion import (
    CommitteeScheduleRequest,
    PromotionDecision,
    PromotionDecisionRequest,
    PromotionRequest,
    PromotionRequestCreate,
    PromotionStats,
)
from app.services.repository import HRRepository

router = APIRouter(prefix="/promotions", tags=["promotions"])


@router.post("", response_model=PromotionRequest)
def submit_promotion_request(
    request: PromotionRequestCreate,
    repository: HRRepository = Depends(get_repository),
    persist: Callable[[], None] = Depends(get_state_writer)
):
    promotion = repository.add_promotion(request)
    persist()
    return promotion


@router.get("", response_model=List[PromotionRequest])
def list_promotion_requests(
    status: Optional[str] = None,
    department: Optional[str] = None,
    search: Optional[str] = None,
    repository: HRRepository = Depends(get_repository)
):
    return repository.list_promotions(status=status, department=department, search=search)


@router.get("/stats", response_model=PromotionStats)
def get_promotion_stats(repository: HRRepository = Depends(get_repository)):
    return repository.promotion_stats()


@router.get("/{promotion_id}", response_model=PromotionRequest)
def get_promotion_request(promotion_id: str, repository: HRRepository = Depends(get_repository)):
    return repository.get_promotion(promotion_id)


@router.post("/{promotion_id}/schedule-committee", response_model=PromotionRequest)
def schedule_committee(
    promotion_id: str,
    request: CommitteeScheduleRequest,
    repository: HRRepository = Depends(get_repository),
    persist: Callable[[], None] = Depends(get_state_writer)
):
    promotion = repository.schedule_committee(
        promotion_id,
        meeting_date=request.meeting_date,
        scheduled_by=request.scheduled_by,
        notes=request.notes,
    )
    persist()
    return promotion


@router.post("/{promotion_id}/decisions", response_model=PromotionRequest)
def decide_promotion_request(
    promotion_id: str,
    request: PromotionDecisionRequest,
    repository: HRRepository = Depends(get_repository),
    persist: Callable[[], None] = Depends(get_state_writer)
):
    if request.decision == PromotionDecision.APPROVE:
        promotion = repository.approve_promotion(
            promotion_id, approver_name=request.approver_name, comment=request.comment
        )
    else:
        promotion = repository.reject_promotion(
            promotion_id, decided_by=request.approver_name, notes=request.comment
        )
    persist()
    return promotion
