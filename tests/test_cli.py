import json

import pytest

from order_analytics.cli.analyze import main


def test_json_output(order_history_csv, capsys) -> None:
    assert main([str(order_history_csv), '--json']) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload['totalSpent'] == pytest.approx(85.50)
    assert payload['purchasesByMonth'] == pytest.approx({'2023-01': 40.50, '2023-02': 45.00})
    assert payload['categories'] == pytest.approx({'Electronics': 70.00, 'Food & Grocery': 15.50})
    assert payload['histogram'] == {'$20-50': 3}


def test_report_output(order_history_csv, capsys) -> None:
    assert main([str(order_history_csv)]) == 0

    out = capsys.readouterr().out
    assert 'Total Spent: $85.50' in out
    assert 'Latest order: 2023-02-01' in out
    assert '2023-01' in out
    assert 'Food & Grocery' in out
    assert '$1000+' in out


def test_custom_taxonomy_file(order_history_csv, tmp_path, capsys) -> None:
    taxonomy = tmp_path / 'taxonomy.json'
    taxonomy.write_text(json.dumps({'Peripherals': ['mouse']}), encoding='utf-8')

    assert main([str(order_history_csv), '--json', '--taxonomy', str(taxonomy)]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload['categories'] == pytest.approx({'Peripherals': 25.00, 'Other': 60.50})


def test_purchases_table(order_history_csv, capsys) -> None:
    args = [str(order_history_csv), '--purchases', '--search', 'o', '--sort', 'totalOwed', '--asc']
    assert main(args) == 0

    out = capsys.readouterr().out
    assert '3 matching (page 1 of 1)' in out
    lines = [line for line in out.splitlines() if line.strip().startswith('•')]
    assert 'Coffee Beans' in lines[0]
    assert 'Laptop Charger' in lines[-1]


def test_missing_csv_returns_error(tmp_path, capsys) -> None:
    assert main([str(tmp_path / 'missing.csv')]) == 1
    assert 'CSV file not found' in capsys.readouterr().out


def test_bad_taxonomy_returns_error(order_history_csv, tmp_path, capsys) -> None:
    taxonomy = tmp_path / 'taxonomy.json'
    taxonomy.write_text('not json', encoding='utf-8')

    assert main([str(order_history_csv), '--taxonomy', str(taxonomy)]) == 1
    assert 'Error' in capsys.readouterr().out


def test_rejects_non_positive_page(order_history_csv) -> None:
    with pytest.raises(SystemExit):
        main([str(order_history_csv), '--purchases', '--page', '0'])
