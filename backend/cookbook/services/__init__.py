"""
Cookbook Backend: Services Layer
=================================

Business logic between the routes (HTTP) and the DocumentStore (persistence).

Service Inventory:
    - DocumentStore:      persistence boundary, one per request
    - ReferenceResolver:  embeds referenced records into responses
    - CrudService:        uniform create/read/update/delete contract
    - RecipeService, IngredientService, UnitService, UserService, CommentService
    - RecipeSearch:       faceted, shuffled recipe search
    - AuthGate:           capability check for write endpoints
    - SeedService:        bundled dataset loader
    - FileService:        recipe image storage

Every service receives its store in the constructor; none holds global state.
"""
