"""ORM Models — SQLAlchemy declarative models for persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from employee_api.models.employee import Employee  # noqa: F401
