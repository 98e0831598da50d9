# jobportal/repositories/applications.py
from jobportal.models.application import Application, ApplicationCreate, ApplicationUpdate
from jobportal.repositories.base import Repository

APPLICATIONS_COLLECTION = "applications"


class ApplicationRepository(Repository[Application]):
    collection_name = APPLICATIONS_COLLECTION
    model = Application
    create_model = ApplicationCreate
    update_model = ApplicationUpdate
    # applications are stamped when the seeker applies
    created_field = "applied_at"
