import threading

import pytest

from sales_report.engine import build_report
from sales_report.errors import StructuralValidationError
from sales_report.models import LineItem, Product, PurchaseRecord, Seller
from sales_report.policies import DEFAULT_POLICIES
from sales_report.store import DataStore
from scripts.seed_data import RECORD_COUNT, seed


def make_store() -> DataStore:
    s = DataStore()
    s.add_product(Product(id=1, name="Moka Pot", purchase_price=20))
    s.add_seller(Seller(id="seller_1", first_name="Maria", last_name="Ivanova"))
    s.add_seller(Seller(id="seller_2", first_name="Ivan", last_name="Smirnov"))
    s.add_purchase_record(PurchaseRecord(
        seller_id="seller_1",
        items=[LineItem(product_id=1, quantity=2, sale_price=30)],
    ))
    return s


class TestDataStore:
    def test_snapshot_feeds_report(self):
        report = build_report(make_store().snapshot(), DEFAULT_POLICIES)
        assert [e.seller_id for e in report] == ["seller_1", "seller_2"]
        assert report[0].profit == 20

    def test_records_for_seller(self):
        s = make_store()
        assert len(s.get_records_for_seller("seller_1")) == 1
        assert s.get_records_for_seller("seller_2") == []

    def test_lookups(self):
        s = make_store()
        assert s.get_seller("seller_2").full_name == "Ivan Smirnov"
        assert s.get_product(1).name == "Moka Pot"
        assert s.get_product(2) is None

    def test_empty_store_is_rejected_by_report(self):
        s = make_store()
        s.clear()
        with pytest.raises(StructuralValidationError):
            build_report(s.snapshot(), DEFAULT_POLICIES)

    def test_replace_with_takes_other_contents(self):
        s = make_store()
        fresh = DataStore()
        fresh.add_seller(Seller(id=7, first_name="Olga", last_name="Kuznetsova"))
        s.replace_with(fresh)

        assert list(s.sellers) == [7]
        assert s.products == {}
        assert s.purchase_records == []
        # later writes to the source do not leak in
        fresh.add_seller(Seller(id=8, first_name="Dmitry", last_name="Volkov"))
        assert list(s.sellers) == [7]

    def test_snapshots_never_see_partial_reseed(self):
        seeded = DataStore()
        seed(seeded)
        s = DataStore()
        s.replace_with(seeded)

        sizes = set()
        stop = threading.Event()

        def reader():
            while not stop.is_set():
                snap = s.snapshot()
                sizes.add((len(snap.products), len(snap.sellers), len(snap.purchase_records)))

        t = threading.Thread(target=reader)
        t.start()
        for _ in range(20):
            s.clear()
            s.replace_with(seeded)
        stop.set()
        t.join()

        full = (len(seeded.products), len(seeded.sellers), len(seeded.purchase_records))
        assert sizes <= {(0, 0, 0), full}


class TestSeedData:
    def test_seed_is_deterministic(self):
        a, b = DataStore(), DataStore()
        seed(a)
        seed(b)
        assert build_report(a.snapshot(), DEFAULT_POLICIES) == build_report(b.snapshot(), DEFAULT_POLICIES)

    def test_seeded_report_covers_roster(self):
        s = DataStore()
        seed(s)
        report = build_report(s.snapshot(), DEFAULT_POLICIES)

        assert len(report) == len(s.sellers)
        profits = [e.profit for e in report]
        assert profits == sorted(profits, reverse=True)
        # the unknown-seller record is skipped, the unknown-product one still counts
        assert sum(e.sales_count for e in report) == RECORD_COUNT + 1
        assert all(len(e.top_products) <= 10 for e in report)
