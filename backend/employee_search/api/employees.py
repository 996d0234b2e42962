"""
Employee search endpoints.

Every endpoint maps its inputs to a probe employee and delegates to
EmployeeService. POST bodies are example employees in camelCase JSON.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from employee_search.api.dependencies import EmployeeServiceDep
from employee_search.schemas.employee import EmployeeProbe, EmployeeResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employees", tags=["employees"])

NOT_FOUND_DETAIL = "No employee found matching the given example"


@router.get(
    "/search",
    response_model=List[EmployeeResponse],
    summary="Search employees",
    description=(
        "Case-insensitive partial match on first name and department. "
        "Omitted parameters do not constrain the search."
    ),
)
async def search_employees(
    service: EmployeeServiceDep,
    first_name: Optional[str] = Query(default=None, alias="firstName"),
    department: Optional[str] = Query(default=None),
) -> List[EmployeeResponse]:
    employees = await service.find_employees_with_custom_matcher(first_name, department)
    return [EmployeeResponse.model_validate(e) for e in employees]


@router.post(
    "/search/example",
    response_model=List[EmployeeResponse],
    summary="Find employees by example",
    description="Exact match on every non-null field of the example.",
)
async def find_by_example(
    probe: EmployeeProbe,
    service: EmployeeServiceDep,
) -> List[EmployeeResponse]:
    employees = await service.find_employees_by_example(probe.to_entity())
    return [EmployeeResponse.model_validate(e) for e in employees]


@router.post(
    "/search/example/one",
    response_model=EmployeeResponse,
    summary="Find one employee by example",
    description="Exact match on every non-null field; 404 when nothing matches.",
)
async def find_one_by_example(
    probe: EmployeeProbe,
    service: EmployeeServiceDep,
) -> EmployeeResponse:
    """
    Find the single employee matching the example.

    Raises:
        HTTPException 404: If no employee matches
        IncorrectResultSizeError: If several employees match (409 via handler)
    """
    employee = await service.find_one_employee_by_example(probe.to_entity())

    if employee is None:
        logger.info(
            "No employee matched example",
            extra={"probe": probe.model_dump(exclude_none=True)}
        )
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=NOT_FOUND_DETAIL
        )

    return EmployeeResponse.model_validate(employee)


@router.post(
    "/count",
    response_model=int,
    summary="Count employees by example",
)
async def count_by_example(
    probe: EmployeeProbe,
    service: EmployeeServiceDep,
) -> int:
    return await service.count_employees_by_example(probe.to_entity())


@router.post(
    "/exists",
    response_model=bool,
    summary="Check whether an employee matches the example",
)
async def exists_by_example(
    probe: EmployeeProbe,
    service: EmployeeServiceDep,
) -> bool:
    return await service.exists_by_example(probe.to_entity())
