"""
Cookbook Backend: API Routes Package
=====================================

Route Inventory:
    - recipes.py:  GET/POST /recipes, GET/PUT/DELETE /recipes/{id},
                   POST /recipes/{id}/comment, DELETE /recipes/{id}/comment/{commentId}
    - catalog.py:  CRUD /ingredients, CRUD /units
    - users.py:    CRUD /users, POST /login, CRUD /comments
    - images.py:   POST /uploadImage, GET /images/{filename}
    - seed.py:     GET /initRecipes
    - health.py:   GET /health

Routes stay thin: extract request data, call a service, return its model.
"""
