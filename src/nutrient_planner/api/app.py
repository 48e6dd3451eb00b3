"""FastAPI application factory."""

import logging

from fastapi import Depends, FastAPI, Header, HTTPException, Request, status
from fastapi.responses import JSONResponse

from nutrient_planner.api.schemas import (
    FoodDefinitionPayload,
    MealPlanDraftPayload,
    MealTemplateDraftPayload,
    food_to_dict,
    template_to_dict,
    violation_to_dict,
)
from nutrient_planner.app_logging import configure_logging
from nutrient_planner.containers import AppContainer
from nutrient_planner.domain.enums import Visibility
from nutrient_planner.domain.errors import (
    ConsistencyError,
    FoodNotFoundError,
    NotFoundError,
    ValidationError,
)
from nutrient_planner.services.validation import ValidationResult


async def require_user(x_user_id: str | None = Header(default=None)) -> str:
    """Return the calling user's id, rejecting anonymous requests."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return x_user_id.strip()


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    @app.exception_handler(ValidationError)
    async def handle_validation_error(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        kind = "consistency" if isinstance(exc, ConsistencyError) else "validation"
        logger.info("Request rejected (%s): %s", kind, exc)
        return JSONResponse(
            status_code=422,
            content={
                "error": kind,
                "errors": [violation_to_dict(v) for v in exc.violations],
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        logger.info("Not found: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": "not_found", "message": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/foods/validate")
    async def validate_food(
        payload: FoodDefinitionPayload, request: Request
    ) -> dict[str, object]:
        """Check a food definition without storing it."""
        state_container: AppContainer = request.app.state.container
        result = state_container.food_service.check_definition(payload.to_domain())
        return _result_to_dict(result)

    @app.post("/foods", status_code=status.HTTP_201_CREATED)
    async def create_food(
        payload: FoodDefinitionPayload,
        request: Request,
        user_id: str = Depends(require_user),
    ) -> dict[str, object]:
        """Accept a food definition into the catalog."""
        state_container: AppContainer = request.app.state.container
        accepted = state_container.food_service.create_food(
            user_id, payload.to_domain()
        )
        return {"food": food_to_dict(accepted.food), "warnings": accepted.warnings}

    @app.get("/foods")
    async def list_foods(
        request: Request, x_user_id: str | None = Header(default=None)
    ) -> list[dict[str, object]]:
        """Return public foods plus the caller's private foods."""
        state_container: AppContainer = request.app.state.container
        foods = state_container.food_catalog.visible_to(x_user_id or "")
        return [food_to_dict(food) for food in foods]

    @app.get("/foods/{food_id}")
    async def get_food(
        food_id: str,
        request: Request,
        x_user_id: str | None = Header(default=None),
    ) -> dict[str, object]:
        """Return a public food, or a private food to its owner."""
        state_container: AppContainer = request.app.state.container
        food = state_container.food_service.get_food(food_id)
        if food.visibility == Visibility.PRIVATE and food.owner_id != x_user_id:
            raise FoodNotFoundError(food_id)
        return food_to_dict(food)

    @app.post("/meal-templates/compute")
    async def compute_meal_template(
        payload: MealTemplateDraftPayload,
        request: Request,
        user_id: str = Depends(require_user),
    ) -> dict[str, object]:
        """Compute line items and totals for a meal template."""
        state_container: AppContainer = request.app.state.container
        template = state_container.meal_template_service.create_template(
            user_id, payload.to_domain()
        )
        return template_to_dict(template)

    @app.post("/meal-plans/validate")
    async def validate_meal_plan(
        payload: MealPlanDraftPayload, request: Request
    ) -> dict[str, object]:
        """Check a meal plan definition."""
        state_container: AppContainer = request.app.state.container
        validator = state_container.meal_plan_service.validator
        result = validator.validate_create(payload.to_domain())
        body = _result_to_dict(result)
        body["spanDays"] = validator.span_days(payload.start_date, payload.end_date)
        return body

    return app


def _result_to_dict(result: ValidationResult) -> dict[str, object]:
    return {
        "valid": result.is_valid,
        "errors": [violation_to_dict(v) for v in result.violations],
        "warnings": list(result.warnings),
    }
