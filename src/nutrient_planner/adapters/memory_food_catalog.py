"""In-process food catalog."""

from dataclasses import dataclass, field

from nutrient_planner.domain.enums import Visibility
from nutrient_planner.domain.nutrition import FoodItem
from nutrient_planner.services.foods import FoodRepository


@dataclass
class InMemoryFoodCatalog(FoodRepository):
    """Food repository backed by a dict, keyed by food id."""

    foods: dict[str, FoodItem] = field(default_factory=dict)

    def add_food(self, food: FoodItem) -> None:
        """Store an accepted food."""
        self.foods[food.id] = food

    def get_food(self, food_id: str) -> FoodItem | None:
        """Return a food by id, if present."""
        return self.foods.get(food_id)

    def visible_to(self, user_id: str) -> list[FoodItem]:
        """Return public foods plus the user's own private foods."""
        return [
            food
            for food in self.foods.values()
            if food.visibility == Visibility.PUBLIC or food.owner_id == user_id
        ]
