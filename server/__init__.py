"""HTTP layer for the exercise tracker."""
