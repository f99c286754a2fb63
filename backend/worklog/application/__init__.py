"""
Application Layer

Use cases for the work-record service. Services here orchestrate the
domain and infrastructure layers and own input validation.

Components:
- dtos/: Request and response shapes of the task endpoints
- queries/: Filter, sort and paginate pipeline for task listings
- services/: Task use cases
- validation/: Task form validation
"""
