"""Per-entity column aliases and search criteria tables."""
from types import MappingProxyType

from jobly.core.sql import Criterion, Predicate

COMPANY_COLUMNS = MappingProxyType({
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
})

JOB_COLUMNS = MappingProxyType({
    "companyHandle": "company_handle",
})

USER_COLUMNS = MappingProxyType({
    "firstName": "first_name",
    "lastName": "last_name",
    "isAdmin": "is_admin",
})

COMPANY_FILTERS = (
    Criterion("minEmployees", "num_employees", Predicate.AT_LEAST),
    Criterion("maxEmployees", "num_employees", Predicate.AT_MOST),
    Criterion("name", "name", Predicate.CONTAINS),
)

JOB_FILTERS = (
    Criterion("title", "title", Predicate.CONTAINS),
    Criterion("minSalary", "salary", Predicate.AT_LEAST),
    Criterion("hasEquity", "equity", Predicate.POSITIVE),
    Criterion("companyHandle", "company_handle", Predicate.EQUALS),
)
