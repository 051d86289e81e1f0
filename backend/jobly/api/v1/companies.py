from __future__ import annotations

from flask import Blueprint, jsonify

from jobly.core import database
from jobly.core.security import ensure_admin
from jobly.schemas import CompanyNew, CompanySearch, CompanyUpdate, JobSearch, parse_args, parse_body
from jobly.services.companies import Company
from jobly.services.jobs import Job

bp = Blueprint("companies", __name__)


@bp.post("/companies")
@ensure_admin
def create_company():
    data = parse_body(CompanyNew)
    with database.get_db() as db:
        company = Company.create(db, data.payload())
    return jsonify({"company": company}), 201


@bp.get("/companies")
def list_companies():
    """Anyone may search: ?name=&minEmployees=&maxEmployees="""
    search = parse_args(CompanySearch)
    with database.get_db() as db:
        companies = Company.find_all(db, search.criteria())
    return jsonify({"companies": companies})


@bp.get("/companies/<handle>")
def get_company(handle):
    with database.get_db() as db:
        company = Company.get(db, handle)
    return jsonify({"company": company})


@bp.get("/companies/<handle>/jobs")
def list_company_jobs(handle):
    search = parse_args(JobSearch)
    with database.get_db() as db:
        # 404 for an unknown company rather than an empty list
        Company.get(db, handle)
        jobs = Job.find_for_company(db, handle, search.criteria())
    return jsonify({"jobs": jobs})


@bp.patch("/companies/<handle>")
@ensure_admin
def update_company(handle):
    data = parse_body(CompanyUpdate)
    with database.get_db() as db:
        company = Company.update(db, handle, data.payload())
    return jsonify({"company": company})


@bp.delete("/companies/<handle>")
@ensure_admin
def delete_company(handle):
    with database.get_db() as db:
        Company.remove(db, handle)
    return jsonify({"deleted": handle})
