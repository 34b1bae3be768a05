# tests/conftest.py
import pytest

from autocleanx.config import Config

SAMPLE_CSV = """id,score,color,joined,comment
1,10,red,2021-01-05,great product
2,20,blue,2021-02-10,would buy again
3,,red,2021-03-15,too expensive
4,40,red,2021-04-20,arrived late
5,50,blue,,works fine
6,60,red,2021-06-30,
7,,blue,2021-07-04,okay overall
8,80,red,2021-08-08,not bad
9,90,blue,2021-09-09,excellent support
10,100,red,2021-10-10,broke quickly
11,110,blue,2021-11-11,nice colour
12,120,red,2021-12-12,fast shipping
13,130,,2022-01-13,as described
14,140,,2022-02-14,love it
"""

@pytest.fixture
def config():
    """Fresh configuration with default thresholds"""
    return Config()

@pytest.fixture
def sample_csv_text():
    return SAMPLE_CSV

@pytest.fixture
def sample_csv_file(tmp_path):
    """Write the sample dataset to a temporary CSV file"""
    path = tmp_path / "orders.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path
