"""
Panels, tables, chart and window operations of the CalculatorWindow.
"""
