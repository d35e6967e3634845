"""日志配置

为 CLI 与脚本统一安装控制台与 ``run.log`` 文件处理器。库代码本身只通过
``logging.getLogger(__name__)`` 记录，不主动配置处理器。
"""

import logging
import os

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"


def setup_logging(output_dir: str | None = None, level: int = logging.INFO) -> None:
    """配置根日志器

    Parameters
    ----------
    output_dir : str, optional
        若提供，则在该目录追加一个 DEBUG 级别的 ``run.log`` 文件处理器
    level : int, optional
        控制台级别，默认 INFO
    """
    root = logging.getLogger()
    root.setLevel(min(level, logging.DEBUG) if output_dir else level)
    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)
    # 控制台 handler：若不存在则添加，存在则调到期望级别
    has_stream = any(
        isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        for h in root.handlers
    )
    if not has_stream:
        sh = logging.StreamHandler()
        sh.setLevel(level)
        sh.setFormatter(fmt)
        root.addHandler(sh)
    else:
        for h in root.handlers:
            if isinstance(h, logging.StreamHandler) and not isinstance(
                h, logging.FileHandler
            ):
                h.setLevel(level)
    # 文件 handler：总是追加一个新的 run.log（如提供输出目录）
    if output_dir:
        try:
            os.makedirs(output_dir, exist_ok=True)
            fh = logging.FileHandler(
                os.path.join(output_dir, "run.log"), mode="w", encoding="utf-8"
            )
            fh.setLevel(logging.DEBUG)
            fh.setFormatter(fmt)
            root.addHandler(fh)
        except OSError:
            logger.warning("无法创建日志文件处理器，继续仅输出到控制台。")
