"""
Jobly - staffing record API.

Companies, jobs, users and job applications stored in a relational
database and served over a JSON API.

Architecture:
- jobly.utils: SQL fragment builders (partial UPDATE, search WHERE)
- jobly.core: config, auth, route policies, errors, logging
- jobly.services: per-entity data access
- jobly.api: FastAPI routers
"""

__version__ = "1.0.0"
