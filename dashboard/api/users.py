from dashboard.api.screens import add_form_routes, screen_router

router = screen_router("users")
add_form_routes(router, "users")
