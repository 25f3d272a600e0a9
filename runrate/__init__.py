"""
Energy run-rate forecasting service.

Projects partial-period meter consumption (hours into a day, days into a
month) to the full period, blending in the previous month when the current
month has too little data.
"""
