"""app: dispatch navigation events."""

from typing import Any, Callable, Dict

from nav_router import Request, Response, Router

router = Router(name="app", base="/app", initial="/app", debug=True)


def timing(request: Request, response: Response, next: Callable) -> None:
    """Log every navigation."""
    router.log.info(f"navigate {request.path}")
    next()


def require_user(request: Request, response: Response, next: Callable) -> None:
    """Stop the chain when no user is present."""
    if not request.state.get("user"):
        response.error("login required")
        return
    next()


def home(request: Request, response: Response, next: Callable) -> None:
    response.send("home", {})


def people(request: Request, response: Response, next: Callable) -> None:
    response.send("people", {})


def person(request: Request, response: Response, next: Callable) -> None:
    response.send("person", request.params)


def post(request: Request, response: Response, next: Callable) -> None:
    response.send("post", request.params)


def admin(request: Request, response: Response, next: Callable) -> None:
    response.send("admin", {"user": request.state["user"]})


def error(request: Request, response: Response, payload: Any) -> None:
    response.send("error", {"path": request.path, "reason": payload})


router.use("*", timing)
router.use(["/admin", "/admin/*"], require_user)

router.get("/", home)
router.get("/people", people).add("/:id->[0-9]+", person).add(
    "/:id->[0-9]+/posts/:slug", post
)
router.get("/admin", admin)
router.catch("*", error)


def render(view: str, context: Dict) -> None:
    print(f"{view}: {context}")


if __name__ == "__main__":
    unsubscribe = router.subscribe(render)
    router.execute("/app/people/12")
    router.execute("/app/people/12/posts/hello-world")
    router.execute("/app/admin")
    router.execute("/app/admin", {"user": "ada"})
    router.execute("/app/nowhere")
    unsubscribe()
