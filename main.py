"""
bayesnets 演示入口

使用Hydra进行配置管理，可以灵活运行不同部分的演示。

使用方法:
    python main.py
    python main.py section=sampling
    python main.py sampling.gibbs.burn_in=500 general.seed=7
"""

import hydra
from omegaconf import DictConfig, OmegaConf
import numpy as np

from bayesnets import run_section

np.set_printoptions(precision=4, suppress=True)


@hydra.main(version_base=None, config_path="configs", config_name="config")
def main(cfg: DictConfig) -> None:
    """
    主函数：根据配置运行相应部分的演示

    Args:
        cfg: Hydra配置对象，包含所有运行参数
    """
    print("=" * 80)
    print("bayesnets - 马尔可夫随机场与Gibbs采样")
    print("=" * 80)
    print(OmegaConf.to_yaml(cfg))

    run_section(cfg.section, cfg)

    print("\n" + "=" * 80)
    print("运行完成！")
    print("=" * 80)


if __name__ == "__main__":
    main()
