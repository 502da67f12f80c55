# Web Layer
# =========
# FastAPI dashboard and JSON API. See app.create_app().
