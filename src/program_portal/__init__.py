"""Program Portal package.

Role-based dashboards for a training program-management platform. The package
is organized by feature modules (programs, attendance, roadmaps, ...) with a
thin Flask controller layer and service/repository layers on top of the
remote REST API.
"""
