"""Tests for product reviews."""

import pytest

from storefront.domain.errors import ConflictingStateError, InvalidInputError, NotFoundError
from storefront.domain.schemas import ReviewCreate, ReviewUpdate
from storefront.services.review_service import ReviewService

pytestmark = pytest.mark.service


@pytest.fixture
def service(db):
    return ReviewService(db)


@pytest.mark.parametrize("rating", [0, 6, -1])
def test_rating_outside_range_is_rejected(service, make_customer, make_product, rating):
    customer, product = make_customer(), make_product()

    with pytest.raises(InvalidInputError):
        service.create_review(ReviewCreate(customer_id=customer.id, product_id=product.id, rating=rating))

    assert service.list_by_product(product.id) == []


@pytest.mark.parametrize("rating", [1, 5])
def test_rating_bounds_are_accepted(service, make_customer, make_product, rating):
    review = service.create_review(
        ReviewCreate(customer_id=make_customer().id, product_id=make_product().id, rating=rating)
    )

    assert review.rating == rating


def test_second_review_of_same_product_is_conflict(service, make_customer, make_product):
    customer, product = make_customer(), make_product()
    service.create_review(ReviewCreate(customer_id=customer.id, product_id=product.id, rating=4))

    with pytest.raises(ConflictingStateError):
        service.create_review(ReviewCreate(customer_id=customer.id, product_id=product.id, rating=2))


def test_review_of_unknown_product(service, make_customer):
    with pytest.raises(NotFoundError):
        service.create_review(ReviewCreate(customer_id=make_customer().id, product_id=999, rating=3))


def test_update_checks_rating(service, make_customer, make_product):
    review = service.create_review(
        ReviewCreate(customer_id=make_customer().id, product_id=make_product().id, rating=3)
    )

    with pytest.raises(InvalidInputError):
        service.update_review(review.id, ReviewUpdate(rating=9))

    updated = service.update_review(review.id, ReviewUpdate(rating=5, comment="grew on me"))
    assert (updated.rating, updated.comment) == (5, "grew on me")


def test_average_rating(service, make_customer, make_product):
    product = make_product()
    for rating in (5, 4, 4):
        service.create_review(ReviewCreate(customer_id=make_customer().id, product_id=product.id, rating=rating))

    result = service.average_rating(product.id)

    assert result == {"product_id": product.id, "average_rating": 4.33, "review_count": 3}


def test_average_rating_without_reviews(service, make_product):
    product = make_product()

    assert service.average_rating(product.id) == {
        "product_id": product.id,
        "average_rating": None,
        "review_count": 0,
    }


def test_delete_review(service, make_customer, make_product):
    customer = make_customer()
    review = service.create_review(ReviewCreate(customer_id=customer.id, product_id=make_product().id, rating=3))

    service.delete_review(review.id)

    assert service.list_by_customer(customer.id) == []
