"""
Option pricing: payoffs, analytical Black-Scholes, and Monte Carlo simulation.
"""
