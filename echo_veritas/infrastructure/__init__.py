# Infrastructure Layer
# ====================
# Contains all external integrations:
# - classifier/: authenticity classifier clients (OpenRouter LLM, heuristics)
# - importer/:   pasted text, CSV and Excel review ingestion
# - export/:     CSV export of session results
# - config/:     environment and settings management
#
# This layer can be replaced without affecting the domain/application layers.
