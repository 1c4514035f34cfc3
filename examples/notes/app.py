"""Notes — a small single-page notes app.

Demonstrates REST-style routes, a form using the ``_method`` override,
a login guard as a before filter, an after filter, and a state route for
an editor panel that never changes the URL.

Inspect it (from this directory):
    waypoint routes app
    waypoint match app get /notes/1
"""

from waypoint import App, Request

app = App()
router = app.router

notes: dict[str, str] = {}
session = {"user": None}
visited: list[str] = []
panel = {"open": None}


def require_login(request: Request) -> bool:
    return session["user"] is not None


def remember_visit(request: Request) -> None:
    visited.append(request.full_path)


def list_notes(request: Request) -> list[str]:
    return sorted(notes)


def show_note(request: Request) -> str | None:
    return notes.get(request.params["id"])


def create_note(request: Request) -> str:
    note_id = str(len(notes) + 1)
    notes[note_id] = request.params["text"]
    return note_id


def update_note(request: Request) -> str:
    notes[request.params["id"]] = request.params["text"]
    return request.params["id"]


def delete_note(request: Request) -> None:
    notes.pop(request.params["id"], None)


def open_editor(request: Request) -> str:
    panel["open"] = request.params["id"]
    return request.params.get("mode", "edit")


def login(request: Request) -> str:
    session["user"] = request.params["name"]
    return session["user"]


router.before(require_login, path="/notes/*rest")
router.after(remember_visit)

router.post("/login", login)
router.get("/notes", list_notes)
router.post("/notes", create_note)
router.get("/notes/:id", show_note)
router.put("/notes/:id", update_note)
router.delete("/notes/:id", delete_note)
router.state("/notes/:id/editor", open_editor)
