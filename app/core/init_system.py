import logging
from datetime import date

from app.schemas.employee import EmployeeCreate, EmploymentStatus, Gender
from app.services.repository import HRRepository

logger = logging.getLogger(__name__)

DEMO_EMPLOYEES = [
    EmployeeCreate(
        code="EMP001",
        name="Alice Smith",
        email="alice.smith@university.edu",
        gender=Gender.FEMALE,
        department="CS",
        faculty="Computing",
        designation="Senior Lecturer",
        join_date=date(2019, 6, 1),
        employment_status=EmploymentStatus.CONFIRMED,
        salary_base=150000,
    ),
    EmployeeCreate(
        code="EMP002",
        name="Bob Ahmed",
        email="bob.ahmed@university.edu",
        gender=Gender.MALE,
        department="HR",
        faculty="Management Sciences",
        designation="Lecturer",
        join_date=date(2024, 7, 15),
        employment_status=EmploymentStatus.PROBATION,
        salary_base=120000,
    ),
]


def init_system_data(repository: HRRepository) -> int:
    """
    Seeds the demo roster when the store is empty.
    Returns the number of employees created.
    """
    if not repository.is_empty():
        logger.info("System initialization check: existing state found, skipping demo seed.")
        return 0

    logger.info("Running startup initialization...")
    created = 0
    for data in DEMO_EMPLOYEES:
        repository.add_employee(data)
        created += 1
    logger.info(f"✓ Seeded {created} demo employees.")
    return created
