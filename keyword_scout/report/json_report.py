# keyword_scout/report/json_report.py

"""
Генерация JSON-отчёта для проекта KeywordScout.

Сериализация объекта RunReport в файл.
"""
from pathlib import Path

from keyword_scout.aggregator import RunReport


def render_json(report: RunReport, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Сохраняет отчёт report в формате JSON по указанному пути.

    :param report: объект RunReport с итогами запуска
    :param output_path: путь к JSON-файлу
    :param pretty: форматировать с отступом 2
    :return: Path сохранённого файла

    Пример:
    ```python
    from keyword_scout.report.json_report import render_json
    report_path = render_json(report, 'reports/run.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(report.json(pretty=pretty), encoding="utf-8")
    return output
