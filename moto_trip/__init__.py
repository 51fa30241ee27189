"""Moto Trip Planner: AI-generated route plans with live weather."""
