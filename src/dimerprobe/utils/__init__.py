"""
工具模块
"""

__all__ = ["setup_logging", "plot_potential", "plot_curves"]


# 延迟导入，避免未绘图时加载 matplotlib
def __getattr__(name):
    if name == "setup_logging":
        from .log_config import setup_logging
        return setup_logging
    elif name == "plot_potential":
        from .plotting import plot_potential
        return plot_potential
    elif name == "plot_curves":
        from .plotting import plot_curves
        return plot_curves
    else:
        raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
