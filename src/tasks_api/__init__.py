"""
FastAPI Tasks API package.

Create the application with `src.tasks_api.main.create_app`, or run it with
`python -m src.tasks_api.serve`.
"""
