"""
FastAPI routers grouped by document (club, members, news, admins, system).

Each file inside this package exposes an APIRouter that is included in the
main application (app.py). Routers resolve the shared DocumentStore and
EventBroadcaster from ``app.state`` and publish an event after every
successful change.
"""
