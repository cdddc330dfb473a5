# Routes package init
"""
ChefNotes Backend — API Routes Package
========================================

Route Inventory:
    - recipes.py:     GET/POST   /api/recipes
                      GET/DELETE /api/recipes/{id}
    - recordings.py:  POST   /api/recipes/{id}/audio-recordings
                      GET    /api/audio-recordings/{id}/audio
                      DELETE /api/audio-recordings/{id}
    - notes.py:       POST   /api/recipes/{id}/text-notes
                      DELETE /api/text-notes/{id}
    - convert.py:     POST   /api/recipes/{id}/convert-to-recipe
    - health.py:      GET    /health

Routes stay thin: parse the request, call RecipeService, pick the status code.
"""
