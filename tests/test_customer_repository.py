"""
Tests for CustomerRepository against a sqlite store.
"""
import pytest

from lunchly.errors import NotFoundError, StoreError, UnsavedCustomerError
from lunchly.repositories import CustomerRepository
from lunchly.schemas import Customer


def names(customers):
    return [c.full_name for c in customers]


class TestAll:

    async def test_empty_store_returns_empty_list(self, repo):
        assert await repo.all() == []

    async def test_single_customer(self, repo, make_customer):
        await make_customer("Mei", "Chen")
        assert names(await repo.all()) == ["Mei Chen"]

    async def test_ordered_by_last_then_first_name(self, repo, make_customer):
        await make_customer("Robert", "Smith")
        await make_customer("Mei", "Chen")
        await make_customer("Hannah", "Robert")
        await make_customer("David", "Chen")

        assert names(await repo.all()) == [
            "David Chen",
            "Mei Chen",
            "Hannah Robert",
            "Robert Smith",
        ]


class TestGetAndSave:

    async def test_insert_assigns_new_id(self, repo):
        customer = Customer(first_name="Laura", last_name="Osei", phone="555-0101", notes="Fridays")
        assert customer.id is None

        await repo.save(customer)

        assert isinstance(customer.id, int)
        assert customer.is_persisted
        fetched = await repo.get(customer.id)
        assert fetched == customer

    async def test_inserts_get_distinct_ids(self, make_customer):
        first = await make_customer("Anthony", "Gonzales")
        second = await make_customer("Anthony", "Gonzales")
        assert first.id != second.id

    async def test_update_keeps_id_and_touches_only_that_row(self, repo, make_customer):
        robert = await make_customer("Robert", "Smith", phone="555-1111")
        other = await make_customer("Hannah", "Robert", phone="555-2222")
        robert_id = robert.id

        robert.phone = "555-9999"
        robert.notes = "Moved to the patio"
        await repo.save(robert)

        assert robert.id == robert_id
        fetched = await repo.get(robert_id)
        assert fetched.phone == "555-9999"
        assert fetched.notes == "Moved to the patio"
        assert await repo.get(other.id) == other
        assert len(await repo.all()) == 2

    async def test_update_of_missing_row_is_silent(self, repo):
        ghost = Customer(id=4242, first_name="No", last_name="Body")
        await repo.save(ghost)
        assert ghost.id == 4242
        assert await repo.all() == []

    async def test_get_missing_id_raises_not_found(self, repo):
        with pytest.raises(NotFoundError, match="No such customer: 99"):
            await repo.get(99)

    async def test_optional_fields_round_trip_as_none(self, repo, make_customer):
        customer = await make_customer("David", "Chen")
        fetched = await repo.get(customer.id)
        assert fetched.phone is None
        assert fetched.notes is None


class TestSearch:

    async def test_single_word_matches_first_or_last_name(self, repo, make_customer):
        await make_customer("Robert", "Smith")
        await make_customer("Hannah", "Robert")
        await make_customer("Mei", "Chen")

        found = await repo.search("Robert")

        assert sorted(names(found)) == ["Hannah Robert", "Robert Smith"]

    async def test_two_words_match_first_and_last_name(self, repo, make_customer):
        await make_customer("Robert", "Smith")
        await make_customer("Hannah", "Robert")
        await make_customer("Robert", "Jones")

        assert names(await repo.search("robert smith")) == ["Robert Smith"]

    async def test_matching_ignores_case(self, repo, make_customer):
        await make_customer("Mei", "Chen")
        assert names(await repo.search("CHEN")) == ["Mei Chen"]
        assert names(await repo.search("mEI cHeN")) == ["Mei Chen"]

    async def test_extra_whitespace_is_ignored(self, repo, make_customer):
        await make_customer("Robert", "Smith")
        assert names(await repo.search("  robert   smith ")) == ["Robert Smith"]

    async def test_words_after_second_are_ignored(self, repo, make_customer):
        await make_customer("Robert", "Smith")
        assert names(await repo.search("robert smith jr")) == ["Robert Smith"]

    async def test_first_and_last_name_are_not_swapped(self, repo, make_customer):
        await make_customer("Robert", "Smith")
        with pytest.raises(NotFoundError):
            await repo.search("smith robert")

    async def test_no_match_raises_not_found_with_query(self, repo, make_customer):
        await make_customer("Robert", "Smith")
        with pytest.raises(NotFoundError, match="zzz-nonexistent"):
            await repo.search("zzz-nonexistent")

    async def test_blank_query_raises_not_found(self, repo, make_customer):
        await make_customer("Robert", "Smith")
        with pytest.raises(NotFoundError):
            await repo.search("   ")

    async def test_quotes_are_matched_literally(self, repo, make_customer):
        await make_customer("Liam", "O'Brien")
        assert names(await repo.search("o'brien")) == ["Liam O'Brien"]

    async def test_non_ascii_names_are_found(self, repo, make_customer):
        await make_customer("Émile", "Zola")
        await make_customer("Ödön", "Horváth")

        assert names(await repo.search("Émile")) == ["Émile Zola"]
        assert names(await repo.search("ÉMILE")) == ["Émile Zola"]
        assert names(await repo.search("ödön horváth")) == ["Ödön Horváth"]


class TestTopTen:

    async def test_ranks_by_reservation_count(self, repo, make_customer, add_reservations):
        a = await make_customer("Anthony", "Gonzales")
        b = await make_customer("Robert", "Smith")
        await make_customer("Hannah", "Robert")
        await add_reservations(b.id, count=3)
        await add_reservations(a.id, count=5)

        top = await repo.top_ten()

        assert [c.id for c in top] == [a.id, b.id]

    async def test_no_reservations_returns_empty_list(self, repo, make_customer):
        await make_customer("Anthony", "Gonzales")
        assert await repo.top_ten() == []

    async def test_limited_to_ten_with_name_tiebreak(self, repo, make_customer, add_reservations):
        last_names = [f"Name{letter}" for letter in "LKJIHGFEDCBA"]
        for last_name in last_names:
            customer = await make_customer("Pat", last_name)
            await add_reservations(customer.id)

        top = await repo.top_ten()

        assert len(top) == 10
        assert [c.last_name for c in top] == sorted(last_names)[:10]


class TestReservations:

    async def test_returns_customer_reservations_in_time_order(
        self, repo, database, make_customer, add_reservations
    ):
        customer = await make_customer("Mei", "Chen")
        other = await make_customer("David", "Chen")
        await add_reservations(customer.id, count=3, num_guests=4)
        await add_reservations(other.id, count=1)

        reservations = await repo.get_reservations(customer)

        assert len(reservations) == 3
        assert all(r.customer_id == customer.id for r in reservations)
        assert all(r.num_guests == 4 for r in reservations)
        starts = [r.start_at for r in reservations]
        assert starts == sorted(starts)

    async def test_customer_without_reservations(self, repo, make_customer):
        customer = await make_customer("Laura", "Osei")
        assert await repo.get_reservations(customer) == []

    async def test_unsaved_customer_is_rejected(self, repo):
        with pytest.raises(UnsavedCustomerError):
            await repo.get_reservations(Customer(first_name="Laura", last_name="Osei"))


class TestStoreErrors:

    @pytest.mark.parametrize("call", [
        lambda repo: repo.all(),
        lambda repo: repo.get(1),
        lambda repo: repo.search("Robert"),
        lambda repo: repo.top_ten(),
        lambda repo: repo.save(Customer(first_name="Mei", last_name="Chen")),
        lambda repo: repo.save(Customer(id=1, first_name="Mei", last_name="Chen")),
        lambda repo: repo.get_reservations(Customer(id=1, first_name="Mei", last_name="Chen")),
    ])
    async def test_store_failures_surface_as_store_error(self, call, failing_store):
        repo = CustomerRepository(failing_store)

        with pytest.raises(StoreError) as excinfo:
            await call(repo)

        assert isinstance(excinfo.value.__cause__, ConnectionError)
        assert "connection reset" not in excinfo.value.message

    async def test_failed_insert_leaves_id_unset(self, failing_store):
        customer = Customer(first_name="Mei", last_name="Chen")
        with pytest.raises(StoreError):
            await CustomerRepository(failing_store).save(customer)
        assert customer.id is None

    async def test_constraint_violation_is_store_error(self, repo):
        customer = Customer(first_name="Mei", last_name="Chen")
        customer.last_name = None

        with pytest.raises(StoreError) as excinfo:
            await repo.save(customer)

        assert excinfo.value.message == "insert customer failed"
