"""Qt application layer: animation controller, render engine and widgets."""
