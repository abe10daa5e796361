from bigbasket.data.models import ProductModel
from bigbasket.data.seed import CATALOG, seed


def test_seed_only_fills_empty_catalog(session_factory, db_session):
    assert seed(session_factory) == len(CATALOG)
    assert seed(session_factory) == 0

    assert db_session.query(ProductModel).count() == len(CATALOG)
