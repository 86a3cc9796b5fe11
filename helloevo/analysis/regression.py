"""Polynomial regression over sweep records."""

from __future__ import annotations

from typing import Iterable, Mapping

import numpy as np
from sklearn.linear_model import LinearRegression
from sklearn.pipeline import make_pipeline
from sklearn.preprocessing import PolynomialFeatures, StandardScaler

from helloevo.analysis.sweep import DEPENDENT_VARS, INDEPENDENT_VARS, SweepRecord


class SweepRegression:
    """Multivariate polynomial model of one dependent value.

    Fitted on all independent variables of the records, so it can predict
    outcomes between and beyond the sampled grid points. Inputs are
    standardized before the polynomial expansion.
    """

    def __init__(self, degree: int = 3) -> None:
        if degree < 1:
            raise ValueError(f"degree must be >= 1, got {degree}")
        self.degree = degree
        self.value: str | None = None
        self.model = make_pipeline(
            StandardScaler(),
            PolynomialFeatures(degree=degree),
            LinearRegression(),
        )
        self._means: dict[str, float] = {}
        self._bounds: dict[str, tuple[float, float]] = {}

    @property
    def is_fitted(self) -> bool:
        return self.value is not None

    def fit(self, records: Iterable[SweepRecord], value: str) -> "SweepRegression":
        """Fit ``value`` as a polynomial of the independent variables."""
        if value not in DEPENDENT_VARS:
            raise ValueError(f"value must be among {DEPENDENT_VARS}")
        records = list(records)
        if not records:
            raise ValueError("records must not be empty")

        features = np.array(
            [[float(getattr(r, name)) for name in INDEPENDENT_VARS] for r in records]
        )
        targets = np.array([float(getattr(r, value)) for r in records])
        self.model.fit(features, targets)

        self.value = value
        self._means = dict(zip(INDEPENDENT_VARS, features.mean(axis=0).tolist()))
        self._bounds = {
            name: (float(lo), float(hi))
            for name, lo, hi in zip(
                INDEPENDENT_VARS, features.min(axis=0), features.max(axis=0)
            )
        }
        return self

    def predict(self, points: Iterable[Mapping[str, float]]) -> np.ndarray:
        """Predict for points given as ``{variable: value}``.

        Variables a point leaves out are held at their mean over the fitted
        records.
        """
        self._require_fitted()
        rows = [
            [float(point.get(name, self._means[name])) for name in INDEPENDENT_VARS]
            for point in points
        ]
        if not rows:
            return np.empty(0)
        return self.model.predict(np.array(rows))

    def predict_grid(
        self,
        x: str,
        y: str,
        resolution: int = 25,
        fixed: Mapping[str, float] | None = None,
    ) -> dict[tuple[float, float], float]:
        """Predictions on a ``resolution`` x ``resolution`` grid over two axes.

        Both axes span the range seen in the fitted records; the remaining
        variables take ``fixed`` values or their means. The result has the
        same shape as :func:`pair_averages` output.
        """
        self._require_fitted()
        if x not in INDEPENDENT_VARS or y not in INDEPENDENT_VARS or x == y:
            raise ValueError(f"x and y must be distinct members of {INDEPENDENT_VARS}")
        if resolution < 2:
            raise ValueError(f"resolution must be >= 2, got {resolution}")

        base = dict(fixed or {})
        xs = np.linspace(*self._bounds[x], resolution)
        ys = np.linspace(*self._bounds[y], resolution)
        keys = [(float(xv), float(yv)) for xv in xs for yv in ys]
        points = [{**base, x: xv, y: yv} for xv, yv in keys]
        return dict(zip(keys, self.predict(points).tolist()))

    def _require_fitted(self) -> None:
        if not self.is_fitted:
            raise RuntimeError("regression is not fitted")
