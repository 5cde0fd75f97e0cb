"""Content-based recommender for meal pool alternatives.

Vectorizes persisted meals using nutritional features (calories, protein,
carbs, fat, fiber) and binary blocked-intolerance tags, then computes cosine
similarity to suggest alternatives for a given meal. Only meals of the same
meal type that are safe for the requested intolerances are returned.
"""

from typing import Iterable, List, Tuple
from sqlalchemy.orm import Session
from database import models
from core.exceptions import NotFoundError
from core.intolerances import normalize_intolerances
from core.logger import get_logger
import numpy as np
from sklearn.metrics.pairwise import cosine_similarity
import json

logger = get_logger("services.content_recommender")

NUMERIC_FEATURES = ("total_calories", "total_protein", "total_carbs", "total_fat", "total_fiber")


class ContentBasedRecommender:
    """Content-based recommender using nutritional vectors and intolerance tags.

    Methods
    -------
    _vectorize_meals(meals)
        Convert a list of MealPoolEntry objects into a numeric feature matrix and id list.
    recommend_alternatives(db, meal_id, top_k=5, intolerances=())
        Return a list of (meal_id, score) tuples for the top-k similar safe meals.
    """

    def __init__(self):
        """Initialize the content-based recommender instance."""
        self.logger = logger

    def _vectorize_meals(self, meals: List[models.MealPoolEntry]):
        """Convert meals into a numeric feature matrix and corresponding ids.

        The feature matrix rows are composed of normalized numeric features
        followed by binary blocked-intolerance features.

        Args:
            meals (List[models.MealPoolEntry]): List of pooled meal ORM objects.

        Returns:
            Tuple[numpy.ndarray, List[int], List[set]]: The (n_meals, n_features)
            float array, the meal ids and each meal's blocked tag set.
        """
        parsed = []
        all_tags = set()
        for m in meals:
            tags = set(json.loads(m.blocked_for_intolerances) if m.blocked_for_intolerances else [])
            parsed.append((m, tags))
            all_tags.update(tags)

        tag_list = sorted(all_tags)
        features = []
        ids = []
        for m, tags in parsed:
            num_feats = [float(getattr(m, f) or 0.0) for f in NUMERIC_FEATURES]
            tag_feats = [1.0 if t in tags else 0.0 for t in tag_list]
            features.append(num_feats + tag_feats)
            ids.append(m.id)

        X = np.array(features, dtype=float)
        # normalize numeric columns to unit scale to avoid domination by calories
        if X.shape[0] > 0:
            num_cols = len(NUMERIC_FEATURES)
            col_max = X[:, :num_cols].max(axis=0)
            col_max[col_max == 0] = 1.0
            X[:, :num_cols] = X[:, :num_cols] / col_max
        return X, ids, [tags for _, tags in parsed]

    def recommend_alternatives(
        self,
        db: Session,
        meal_id: int,
        top_k: int = 5,
        intolerances: Iterable[str] = (),
    ) -> List[Tuple[int, float]]:
        """Return the top-k meals most similar to `meal_id` that are safe.

        Args:
            db (Session): SQLAlchemy session used to query meals.
            meal_id (int): ID of the pooled meal to find alternatives for.
            top_k (int): Maximum number of alternatives to return.
            intolerances: Tags the alternatives must not be blocked for.

        Returns:
            List[Tuple[int, float]]: Ordered list of (meal_id, score) pairs.

        Raises:
            NotFoundError: If the meal does not exist.
        """
        target = db.get(models.MealPoolEntry, meal_id)
        if target is None:
            raise NotFoundError("Meal", meal_id)
        wanted = normalize_intolerances(list(intolerances))
        meals = (
            db.query(models.MealPoolEntry)
            .filter(models.MealPoolEntry.meal_type == target.meal_type)
            .order_by(models.MealPoolEntry.id)
            .all()
        )
        if len(meals) < 2:
            return []
        X, ids, blocked = self._vectorize_meals(meals)
        idx = ids.index(meal_id)
        row = cosine_similarity(X[idx:idx + 1], X)[0]
        ranked = [
            (ids[i], float(row[i]))
            for i in range(len(ids))
            if i != idx and not (blocked[i] & wanted)
        ]
        ranked.sort(key=lambda x: (-x[1], x[0]))
        self.logger.debug("Alternatives for meal %s: %s", meal_id, ranked[:top_k])
        return ranked[:top_k]


content_recommender = ContentBasedRecommender()
