from typing import Any, Mapping, Optional, Union

from jobportal.models.base import UpdateModel
from jobportal.models.job import Job, JobCategory, JobCategoryCreate, JobCreate, JobUpdate, check_salary_range
from jobportal.repositories.base import Repository

JOBS_COLLECTION = "jobs"
JOB_CATEGORIES_COLLECTION = "job_categories"


class JobRepository(Repository[Job]):
    collection_name = JOBS_COLLECTION
    model = Job
    create_model = JobCreate
    update_model = JobUpdate

    async def update(self, doc_id: str, updates: Union[UpdateModel, Mapping[str, Any]]) -> Optional[Job]:
        if not isinstance(updates, UpdateModel):
            updates = JobUpdate.model_validate(dict(updates))
        changes = updates.changes()
        if "salary_min" in changes or "salary_max" in changes:
            # a partial update must keep the stored range valid
            current = await self.get_by_id(doc_id)
            if current is not None:
                check_salary_range(
                    changes.get("salary_min", getattr(current, "salary_min", None)),
                    changes.get("salary_max", getattr(current, "salary_max", None)),
                )
        return await super().update(doc_id, updates)


class JobCategoryRepository(Repository[JobCategory]):
    collection_name = JOB_CATEGORIES_COLLECTION
    model = JobCategory
    create_model = JobCategoryCreate
