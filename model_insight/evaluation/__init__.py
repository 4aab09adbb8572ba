"""Regression quality metrics (RMSE, MAE, MSE, R²)."""
