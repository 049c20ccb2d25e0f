"""
FastAPI application entry point and endpoint definitions.

This module initializes the FastAPI application and defines all API routes
for the Smart Recipe Optimizer.

Responsibilities:
- Initialize FastAPI application with CORS and error handling
- Wire the storage backend into the service layer
- Define the recipe catalog endpoints (/api/recipes)
- Define the optimizer endpoints (/api/optimize)
- Handle request validation and error responses
"""

from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from recipe_optimizer.config import settings
from recipe_optimizer.models.optimization import (
    CriteriaSummary,
    MatchCriteria,
    MatchIngredientsRequest,
    MatchIngredientsResponse,
    OptimizationCriteria,
    OptimizeResponse,
    ScoreBreakdownResponse,
)
from recipe_optimizer.models.recipe import (
    RecipeCreate,
    RecipeListResponse,
    RecipeResponse,
    RecipeUpdate,
)
from recipe_optimizer.models.substitution import (
    OriginalIngredientInfo,
    RecipeWithSubstitutionsRequest,
    RecipeWithSubstitutionsResponse,
    SubstitutionEntryCreate,
    SubstitutionEntryListResponse,
    SubstitutionEntryResponse,
    SubstitutionLookupRequest,
    SubstitutionLookupResponse,
)
from recipe_optimizer.services.optimization_service import OptimizationService
from recipe_optimizer.services.recipe_scorer import RecipeScorer
from recipe_optimizer.services.recipe_store import (
    DuplicateSubstitutionError,
    build_store,
)
from recipe_optimizer.services.substitution_service import SubstitutionService
from recipe_optimizer.utils.validators import (
    validate_ingredient_list,
    validate_ingredient_name,
    validate_recipe_id,
)

# Configure logging
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """
    Initialize and configure the FastAPI application.

    Sets up:
    - CORS middleware for frontend communication
    - Exception handlers for consistent error responses
    - Application metadata

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    app = FastAPI(
        title="Smart Recipe Optimizer API",
        description="Recipe catalog with pantry-, diet-, nutrition- and budget-aware ranking",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # Global exception handler for consistent error responses
    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc):
        """
        Handle all uncaught exceptions with consistent error format.

        Returns:
            JSONResponse: Formatted error response
        """
        logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "Internal server error occurred",
                "error": str(exc)
            }
        )

    return app


# Initialize FastAPI application
app = create_app()

# Initialize service layer instances
recipe_store = build_store(settings)
recipe_scorer = RecipeScorer()
substitution_service = SubstitutionService(recipe_store)
optimization_service = OptimizationService(recipe_store, recipe_scorer, substitution_service)


def _check_recipe_id(recipe_id: str) -> None:
    """Reject malformed recipe ids with a 400."""
    try:
        validate_recipe_id(recipe_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


def _recipe_not_found(recipe_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Recipe with ID '{recipe_id}' not found"
    )


@app.get("/")
async def root():
    """
    Root endpoint.

    Returns:
        dict: API banner
    """
    return {"message": "Smart Recipe Optimizer API - Ready!"}


@app.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns:
        dict: Service status and storage backend
    """
    return {
        "status": "healthy",
        "storage": recipe_store.backend_name,
        "version": "1.0.0"
    }


# ==================== Recipe Catalog Endpoints ====================

@app.get("/api/recipes", response_model=RecipeListResponse)
async def list_recipes() -> RecipeListResponse:
    """
    Get all recipes, newest first.

    Returns:
        RecipeListResponse: Recipes and their count
    """
    try:
        recipes = recipe_store.find_all()
        logger.info(f"Fetching {len(recipes)} recipes")
        return RecipeListResponse(count=len(recipes), data=recipes)
    except Exception as e:
        logger.error(f"Error fetching recipes: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error fetching recipes: {str(e)}"
        )


@app.get("/api/recipes/{recipe_id}", response_model=RecipeResponse)
async def get_recipe(recipe_id: str) -> RecipeResponse:
    """
    Get a specific recipe by ID.

    Raises:
        HTTPException: 404 if recipe not found
    """
    try:
        _check_recipe_id(recipe_id)
        recipe = recipe_store.find_by_id(recipe_id)
        if recipe is None:
            raise _recipe_not_found(recipe_id)
        return RecipeResponse(data=recipe)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching recipe: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error fetching recipe: {str(e)}"
        )


@app.post(
    "/api/recipes",
    response_model=RecipeResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_recipe(recipe: RecipeCreate) -> RecipeResponse:
    """
    Create a recipe.

    The payload is validated by RecipeCreate (422 on invalid input).

    Returns:
        RecipeResponse: The stored recipe with its ID
    """
    try:
        saved = recipe_store.create_recipe(recipe)
        return RecipeResponse(message="Recipe created successfully", data=saved)
    except Exception as e:
        logger.error(f"Error creating recipe: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error creating recipe: {str(e)}"
        )


@app.put("/api/recipes/{recipe_id}", response_model=RecipeResponse)
async def update_recipe(recipe_id: str, update: RecipeUpdate) -> RecipeResponse:
    """
    Update an existing recipe.

    Only the fields present in the body change; the merged recipe must
    still be valid.

    Raises:
        HTTPException: 400 if the merged recipe is invalid, 404 if not found
    """
    try:
        _check_recipe_id(recipe_id)
        updated = recipe_store.update_recipe(recipe_id, update)
        if updated is None:
            raise _recipe_not_found(recipe_id)
        return RecipeResponse(message="Recipe updated successfully", data=updated)
    except HTTPException:
        raise
    except ValueError as e:
        logger.warning(f"Rejected update of recipe {recipe_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Error updating recipe: {str(e)}"
        )
    except Exception as e:
        logger.error(f"Error updating recipe: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error updating recipe: {str(e)}"
        )


@app.delete("/api/recipes/{recipe_id}", response_model=RecipeResponse)
async def delete_recipe(recipe_id: str) -> RecipeResponse:
    """
    Delete a recipe.

    Returns:
        RecipeResponse: The deleted recipe

    Raises:
        HTTPException: 404 if recipe not found
    """
    try:
        _check_recipe_id(recipe_id)
        removed = recipe_store.delete_recipe(recipe_id)
        if removed is None:
            raise _recipe_not_found(recipe_id)
        return RecipeResponse(message="Recipe deleted successfully", data=removed)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting recipe: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error deleting recipe: {str(e)}"
        )


# ==================== Optimization Endpoints ====================

@app.post("/api/optimize/recipes", response_model=OptimizeResponse)
async def optimize_recipes(criteria: OptimizationCriteria) -> OptimizeResponse:
    """
    Rank the catalog against the user's pantry, diet, goals and budget.

    Each recipe receives an optimization score (0-100), its missing
    ingredients and an ingredient match percentage. The best
    ``maxResults`` recipes are returned, highest score first.

    Returns:
        OptimizeResponse: Ranked recipes and a summary of the criteria
    """
    try:
        ranked = optimization_service.optimize(criteria)
        return OptimizeResponse(
            message="Recipes optimized successfully",
            count=len(ranked),
            optimization_criteria=CriteriaSummary(
                available_ingredients=len(criteria.available_ingredients),
                dietary_restrictions=criteria.dietary_restrictions,
                nutritional_goals=criteria.nutritional_goals,
                budget_constraints=criteria.budget_constraints,
            ),
            data=ranked,
        )
    except Exception as e:
        logger.error(f"Error optimizing recipes: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error optimizing recipes: {str(e)}"
        )


@app.post("/api/optimize/match-ingredients", response_model=MatchIngredientsResponse)
async def match_ingredients(request: MatchIngredientsRequest) -> MatchIngredientsResponse:
    """
    Recipes that can mostly be made from the available ingredients.

    Raises:
        HTTPException: 400 if no available ingredients were sent
    """
    try:
        try:
            validate_ingredient_list(request.available_ingredients)
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        matched = optimization_service.match_by_ingredients(
            recipe_store.find_all(),
            request.available_ingredients,
            request.min_match_percentage,
        )
        return MatchIngredientsResponse(
            message="Ingredient matching completed",
            count=len(matched),
            criteria=MatchCriteria(
                available_ingredients=request.available_ingredients,
                min_match_percentage=request.min_match_percentage,
            ),
            data=matched,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error matching ingredients: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error matching ingredients: {str(e)}"
        )


@app.post("/api/optimize/substitutions", response_model=SubstitutionLookupResponse)
async def find_substitutions(request: SubstitutionLookupRequest) -> SubstitutionLookupResponse:
    """
    Substitutes for one ingredient, scaled to the requested amount.

    Raises:
        HTTPException: 400 if the ingredient name is missing,
                       404 if no substitutes match
    """
    try:
        try:
            validate_ingredient_name(request.ingredient_name)
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        logger.info(f"Substitution lookup: {request.ingredient_name}")
        substitutes = substitution_service.lookup_substitutions(
            request.ingredient_name,
            amount=request.amount,
            unit=request.unit,
            dietary_restrictions=request.dietary_restrictions,
        )

        if not substitutes:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"No substitutions found for {request.ingredient_name}"
            )

        return SubstitutionLookupResponse(
            message="Substitutions found successfully",
            original_ingredient=OriginalIngredientInfo(
                name=request.ingredient_name,
                amount=request.amount,
                unit=request.unit,
            ),
            count=len(substitutes),
            data=substitutes,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error finding substitutions: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error finding substitutions: {str(e)}"
        )


@app.get("/api/optimize/substitutions", response_model=SubstitutionEntryListResponse)
async def list_substitutions() -> SubstitutionEntryListResponse:
    """
    Get every registered substitution entry.

    Returns:
        SubstitutionEntryListResponse: Entries and their count
    """
    try:
        entries = recipe_store.list_substitutions()
        logger.info(f"Fetching {len(entries)} substitution entries")
        return SubstitutionEntryListResponse(count=len(entries), data=entries)
    except Exception as e:
        logger.error(f"Error fetching substitutions: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error fetching substitutions: {str(e)}"
        )


@app.post(
    "/api/optimize/add-substitution",
    response_model=SubstitutionEntryResponse,
    status_code=status.HTTP_201_CREATED
)
async def add_substitution(entry: SubstitutionEntryCreate) -> SubstitutionEntryResponse:
    """
    Register the substitutes of an ingredient.

    Raises:
        HTTPException: 400 if the ingredient already has an entry
    """
    try:
        saved = recipe_store.add_substitution(entry)
        return SubstitutionEntryResponse(
            message="Substitution added successfully",
            data=saved,
        )
    except DuplicateSubstitutionError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Error adding substitution: {str(e)}"
        )
    except Exception as e:
        logger.error(f"Error adding substitution: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error adding substitution: {str(e)}"
        )


@app.post(
    "/api/optimize/recipe-with-substitutions",
    response_model=RecipeWithSubstitutionsResponse
)
async def recipe_with_substitutions(
    request: RecipeWithSubstitutionsRequest
) -> RecipeWithSubstitutionsResponse:
    """
    A recipe with substitution suggestions for what the pantry lacks.

    Raises:
        HTTPException: 404 if recipe not found
    """
    try:
        _check_recipe_id(request.recipe_id)
        result = optimization_service.recipe_with_substitutions(
            request.recipe_id,
            request.available_ingredients,
            request.dietary_restrictions,
        )
        if result is None:
            raise _recipe_not_found(request.recipe_id)

        return RecipeWithSubstitutionsResponse(
            **result.model_dump(),
            message="Recipe with substitutions calculated",
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error calculating recipe substitutions: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error calculating recipe substitutions: {str(e)}"
        )


@app.post("/api/optimize/score-breakdown/{recipe_id}", response_model=ScoreBreakdownResponse)
async def score_breakdown(recipe_id: str, criteria: OptimizationCriteria) -> ScoreBreakdownResponse:
    """
    Explain how one recipe's optimization score is composed.

    Raises:
        HTTPException: 404 if recipe not found
    """
    try:
        _check_recipe_id(recipe_id)
        breakdown = optimization_service.score_recipe(recipe_id, criteria)
        if breakdown is None:
            raise _recipe_not_found(recipe_id)
        return ScoreBreakdownResponse(data=breakdown)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error scoring recipe: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error scoring recipe: {str(e)}"
        )


if __name__ == "__main__":
    import uvicorn

    # For development only - use uvicorn command in production
    uvicorn.run(
        "recipe_optimizer.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=True,
        log_level=settings.LOG_LEVEL.lower()
    )
