# jobportal/repositories/companies.py
from jobportal.models.company import Company, CompanyCreate, CompanyUpdate
from jobportal.repositories.base import Repository

COMPANIES_COLLECTION = "companies"


class CompanyRepository(Repository[Company]):
    collection_name = COMPANIES_COLLECTION
    model = Company
    create_model = CompanyCreate
    update_model = CompanyUpdate
