# cli.py

"""
Точка входа для запуска KeywordScout без установки пакета.

Пример запуска:
    python cli.py --config configs/default.yaml run --output-dir output --json output/run.json
"""
from keyword_scout.cli import cli

if __name__ == '__main__':
    cli()
