"""Consultation API routes.

FastAPI router exposing the consultation service over HTTP.

Developer Golden Rules:
1. CORE DECIDES - Routes never re-validate domain rules
2. TRUSTED CALLER - Identity comes from X-Caller-Identity as supplied
3. FAIL LOUD - Failed results become RFC 7807 problem responses
4. READS NEVER FAIL - Absent records are reported as 404 or zero values
"""

from fastapi import APIRouter, Depends, HTTPException, Request

from src.api.dependencies.consultation import (
    get_caller_identity,
    get_consultation_service,
    get_logical_clock,
)
from src.api.models.consultation import (
    AcknowledgementResponse,
    CastVoteRequest,
    ConsultationDetailsResponse,
    ConsultationErrorResponse,
    DiversityMetricResponse,
    InitializeConsultationRequest,
    SubmissionResponse,
    SubmitInputRequest,
    UpdateRewardPoolRequest,
    VoteResponse,
)
from src.application.dtos.consultation import ConsultationResult
from src.application.ports.logical_clock import LogicalClockProtocol
from src.application.services.consultation_service import ConsultationService
from src.domain.errors import problem_details

router = APIRouter(prefix="/v1/consultation", tags=["consultation"])

_ERROR_RESPONSES: dict[int | str, dict] = {
    400: {"model": ConsultationErrorResponse, "description": "Invalid input"},
    403: {"model": ConsultationErrorResponse, "description": "Caller not allowed"},
    404: {"model": ConsultationErrorResponse, "description": "Submission not found"},
    409: {"model": ConsultationErrorResponse, "description": "State conflict"},
}


def _acknowledge(result: ConsultationResult[bool], request: Request) -> AcknowledgementResponse:
    """Return an acknowledgment or raise the failure as a problem response."""
    if result.ok:
        return AcknowledgementResponse(ok=True)

    assert result.error is not None
    detail = dict(result.problem or problem_details(result.error, result.detail or ""))
    detail["instance"] = str(request.url)
    raise HTTPException(status_code=detail["status"], detail=detail)


@router.post(
    "/initialize",
    response_model=AcknowledgementResponse,
    responses=_ERROR_RESPONSES,
    summary="Open a new consultation activation",
)
async def initialize_consultation(
    request_data: InitializeConsultationRequest,
    request: Request,
    caller: str = Depends(get_caller_identity),
    service: ConsultationService = Depends(get_consultation_service),
) -> AcknowledgementResponse:
    result = await service.initialize(
        caller=caller,
        consultation_id=request_data.consultation_id,
        topic=request_data.topic,
        description=request_data.description,
        deadline=request_data.deadline,
        reward_pool=request_data.reward_pool,
    )
    return _acknowledge(result, request)


@router.post(
    "/close",
    response_model=AcknowledgementResponse,
    responses=_ERROR_RESPONSES,
    summary="Close the live activation",
)
async def close_consultation(
    request: Request,
    caller: str = Depends(get_caller_identity),
    service: ConsultationService = Depends(get_consultation_service),
) -> AcknowledgementResponse:
    result = await service.close(caller=caller)
    return _acknowledge(result, request)


@router.post(
    "/reward-pool",
    response_model=AcknowledgementResponse,
    responses=_ERROR_RESPONSES,
    summary="Raise the reward pool",
)
async def update_reward_pool(
    request_data: UpdateRewardPoolRequest,
    request: Request,
    caller: str = Depends(get_caller_identity),
    service: ConsultationService = Depends(get_consultation_service),
) -> AcknowledgementResponse:
    result = await service.update_reward_pool(
        caller=caller, new_pool=request_data.new_pool
    )
    return _acknowledge(result, request)


@router.get(
    "",
    response_model=ConsultationDetailsResponse,
    summary="Get consultation details",
)
async def get_consultation_details(
    service: ConsultationService = Depends(get_consultation_service),
    clock: LogicalClockProtocol = Depends(get_logical_clock),
) -> ConsultationDetailsResponse:
    details = service.get_details().unwrap()
    window = service.manager.window_at(clock.current_height())
    return ConsultationDetailsResponse.from_details(details, window=window.value)


@router.post(
    "/submissions",
    response_model=AcknowledgementResponse,
    status_code=201,
    responses=_ERROR_RESPONSES,
    summary="Submit a content digest with category tags",
)
async def submit_input(
    request_data: SubmitInputRequest,
    request: Request,
    caller: str = Depends(get_caller_identity),
    service: ConsultationService = Depends(get_consultation_service),
) -> AcknowledgementResponse:
    result = await service.submit(
        caller=caller,
        input_digest=request_data.digest_bytes(),
        category_tags=request_data.category_tags,
    )
    return _acknowledge(result, request)


@router.get(
    "/submissions/{owner}",
    response_model=SubmissionResponse,
    responses={404: {"model": ConsultationErrorResponse}},
    summary="Get one participant's submission",
)
async def get_submission(
    owner: str,
    request: Request,
    service: ConsultationService = Depends(get_consultation_service),
) -> SubmissionResponse:
    submission = service.get_submission(owner).unwrap()
    if submission is None:
        raise HTTPException(
            status_code=404,
            detail={
                "type": "urn:consultation:error:submission-not-found",
                "title": "Submission Not Found",
                "status": 404,
                "detail": f"No submission found for identity {owner}",
                "instance": str(request.url),
            },
        )
    return SubmissionResponse.from_submission(submission)


@router.post(
    "/submissions/{owner}/votes",
    response_model=AcknowledgementResponse,
    status_code=201,
    responses=_ERROR_RESPONSES,
    summary="Vote on a participant's submission",
)
async def cast_vote(
    owner: str,
    request_data: CastVoteRequest,
    request: Request,
    caller: str = Depends(get_caller_identity),
    service: ConsultationService = Depends(get_consultation_service),
) -> AcknowledgementResponse:
    result = await service.cast_vote(
        caller=caller, submission_owner=owner, value=request_data.value
    )
    return _acknowledge(result, request)


@router.get(
    "/submissions/{owner}/votes/{voter}",
    response_model=VoteResponse,
    summary="Get the vote one voter cast on a submission",
)
async def get_vote(
    owner: str,
    voter: str,
    service: ConsultationService = Depends(get_consultation_service),
) -> VoteResponse:
    value = service.get_vote(owner, voter).unwrap()
    return VoteResponse(submission_owner=owner, voter=voter, value=value)


@router.get(
    "/metrics",
    response_model=list[DiversityMetricResponse],
    summary="List all category tag counts",
)
async def list_metrics(
    service: ConsultationService = Depends(get_consultation_service),
) -> list[DiversityMetricResponse]:
    return [
        DiversityMetricResponse.from_metric(m) for m in service.get_metrics().unwrap()
    ]


@router.get(
    "/metrics/{tag}",
    response_model=DiversityMetricResponse,
    summary="Get the count for one category tag",
)
async def get_metric(
    tag: str,
    service: ConsultationService = Depends(get_consultation_service),
) -> DiversityMetricResponse:
    return DiversityMetricResponse(tag=tag, count=service.get_metric(tag).unwrap())
