"""
默认配置

与configs/config.yaml结构相同，供不经过Hydra的调用方和测试使用。
"""

from omegaconf import DictConfig, OmegaConf


def create_default_config() -> DictConfig:
    """创建默认配置"""
    cfg = OmegaConf.create({
        'section': 'all',
        'general': {
            'seed': 42
        },
        'sampling': {
            'gibbs': {
                'n_samples': 2000,
                'burn_in': 200,
                'thinning': 1
            }
        }
    })
    return cfg
