"""
Panel operational functions for the AP Set Planner.
"""


def toggle_log_window(self, state):
    """
    Show or hide the log window.

    Args:
        state (bool): True to show, False to hide.
    """
    self.log_message(f"Components-PanelOp: Log window {'shown' if state else 'hidden'}", self.DEBUG)

    if state:
        self.log_window.show()
        self.logger.set_log_window(self.log_window)
    else:
        self.log_window.hide()
        self.logger.set_log_window(None)


def toggle_input_panel(self, checked):
    """
    Shows or hides the input panel on the left side of the window.

    Args:
        checked (bool): True to hide the panel, False to show it.
    """
    self.log_message(f"Components-PanelOp: Input panel {'hidden' if checked else 'shown'}", self.DEBUG)
    self.input_panel.setVisible(not checked)
