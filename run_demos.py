#!/usr/bin/env python3
"""
bayesnets 完整演示
==================

不经过Hydra，直接用默认配置运行演示。

使用方法：
python run_demos.py                       # 运行所有部分
python run_demos.py --section sampling    # 运行特定部分
python run_demos.py --list                # 列出所有部分
python run_demos.py --quick               # 快速模式（减少采样次数）
"""

import argparse

from bayesnets import SECTIONS, create_default_config, run_section


SECTION_TOPICS = {
    'models': ['从因子构建MRF', '马尔可夫毯', '图分离与条件独立'],
    'sampling': ['系统扫描Gibbs采样', '证据', '预烧期与细化', 'ESS与R̂'],
}


def list_sections():
    """列出所有可用部分"""
    print("\n可用部分：")
    print("-" * 60)
    for name in SECTIONS:
        print(f"\n{name}")
        for topic in SECTION_TOPICS.get(name, []):
            print(f"    • {topic}")
    print("\n" + "-" * 60)


def main():
    """主函数"""
    parser = argparse.ArgumentParser(
        description='bayesnets演示',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '--section', '-s',
        default='all',
        choices=sorted(SECTIONS) + ['all'],
        help='运行指定部分'
    )

    parser.add_argument(
        '--list', '-l',
        action='store_true',
        help='列出所有可用部分'
    )

    parser.add_argument(
        '--seed',
        type=int,
        help='随机种子'
    )

    parser.add_argument(
        '--quick',
        action='store_true',
        help='快速模式（减少采样次数）'
    )

    args = parser.parse_args()

    if args.list:
        list_sections()
        return

    cfg = create_default_config()

    if args.seed is not None:
        cfg.general.seed = args.seed

    if args.quick:
        cfg.sampling.gibbs.n_samples = 200
        cfg.sampling.gibbs.burn_in = 20

    run_section(args.section, cfg)


if __name__ == '__main__':
    main()
