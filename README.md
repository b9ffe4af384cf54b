# modedhr

Human-resources and student-recruitment records for an education system.
Everything is kept in SQLite through the standard library's `sqlite3`; the
package has no third-party dependencies.

## Modules

- `modedhr.hr_enums`: `AcademicPosition`, `DepartmentPosition` and `Action`,
  with `parse_academic_position`, `parse_department_position` and
  `parse_action` (case-insensitive; unknown names raise `ValueError`).
- `modedhr.hr_requests`: leave, resignation and raise request dataclasses,
  `Role`, `RequestType`, `CreateRequestParams` and `create_request`, which
  builds the right request or raises `ValueError` (students cannot request a
  raise; leave dates must be `YYYY-MM-DD`). `apply_status` and each request's
  `apply_status` method set the status to `"approve"` or `"reject"`; a
  rejection also records the reason.
- `modedhr.hr_people`: `Instructor`, `Student`, `InstructorInfo`,
  `StudentInfo`, `StudentStatus`, `ProgramType`, and `parse_status`,
  `status_to_string`, `parse_program_type`, `program_type_to_string`.
  `InstructorInfo.updated` and `StudentInfo.updated` return copies in which
  empty strings (and `NONE` positions) keep the current values.
- `modedhr.hr_util`: `if_not_empty`, `if_not_zero`, `open_database` and
  `TransactionManager`, whose `transaction()` context manager commits on
  success, rolls back on any exception and nests with savepoints; `execute`
  runs a function inside one.
- `modedhr.hr_review`: `review_request`, which parses a request id and action,
  fetches, applies and saves, raising `ReviewError` on any failure.
- `modedhr.request_store`: `LeaveRequestStore` and `ResignationRequestStore`,
  each for students or instructors according to a `Role`.
- `modedhr.raise_requests`: `RaiseRequestStore` for instructors' raise
  requests.
- `modedhr.people_store`: `InstructorHRStore` and `StudentHRStore` add,
  fetch, update, delete, migrate, import (CSV/JSON) and export (CSV/JSON) HR
  records.
- `modedhr.department_store`: `DepartmentStore` lists, fetches, creates,
  updates and deletes department rows by name; a missing name raises
  `DepartmentNotFoundError`.
- `modedhr.recruit_models`: `Admin`, `Applicant`, `ApplicationRound`,
  `ApplicationReport`, `Interview`, `InterviewCriteria` and
  `ApplicationStatus`. Applicants carry round information and interviews
  carry criterion scores as JSON text.
- `modedhr.criteria`: faculty and department threshold criteria (for example
  `EngineeringCriteria`, `ComputerEngineeringCriteria`) and the round criteria
  `AdmissionCriteria`, `PortfolioCriteria`, `QuotaCriteria` and
  `ScholarshipCriteria`, each with `is_satisfied_by(applicant)`.
- `modedhr.field_validation`: `ValidationChain` and `FieldValidator` check
  values from a mapping or an `argparse.Namespace`; `validate()` raises
  `ValidationError` listing every failure.
- `modedhr.deserializer`: `FileDeserializer` reads a `.csv` file into a list
  of dictionaries or a `.json` file into its value.

## Install

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Examples

Building and reviewing a request in memory:

```python
from modedhr.hr_enums import Action
from modedhr.hr_requests import CreateRequestParams, RequestType, Role, create_request

request = create_request(
    Role.STUDENT,
    RequestType.LEAVE,
    CreateRequestParams(id="S001", leave_type="sick", reason="fever", date_str="2024-05-01"),
)
request.apply_status(Action.REJECT, "missing certificate")
print(request.status, request.reason)   # reject missing certificate
```

Storing requests:

```python
from modedhr.hr_requests import Role
from modedhr.hr_util import open_database
from modedhr.request_store import LeaveRequestStore

db = open_database(":memory:")
leaves = LeaveRequestStore(db, Role.STUDENT)
submitted = leaves.submit("S001", "sick", "fever", "2024-05-01")
reviewed = leaves.review(str(submitted.id), "approve", "")
print(reviewed.status)                  # approve
```

Departments:

```python
from modedhr.department_store import DepartmentStore
from modedhr.hr_util import open_database

departments = DepartmentStore(open_database(":memory:"))
departments.create({"name": "Physics"})
print(departments.get_by_name("Physics"))   # {'id': 1, 'name': 'Physics'}
departments.delete_by_name("Physics")
```

Admission criteria:

```python
from modedhr.criteria import ComputerEngineeringCriteria
from modedhr.recruit_models import Applicant

applicant = Applicant(gpax=3.4, tgat1=70, tgat2=65, tgat3=61, tpat3=75)
print(ComputerEngineeringCriteria().is_satisfied_by(applicant))  # True
```

## What it does not do

- It is a library only: there is no command-line program and no web server or
  HTTP API in front of the stores.
- The recruitment models in `modedhr.recruit_models` are plain dataclasses;
  the package has no store that saves them to the database.