import pytest

from errors import EvaluationAlreadyExists, EvaluationNotFound
from fakes import InMemoryEvaluations
from services.evaluation_service import EvaluationService


@pytest.fixture
def service():
    return EvaluationService(InMemoryEvaluations())


def test_create_and_get(service):
    service.create("stu", {"overall_activity": 5, "favorite_booth": "Robotics"})

    evaluation = service.get("stu")
    assert evaluation.overall_activity == 5
    assert evaluation.favorite_booth == "Robotics"
    assert service.count() == 1


def test_second_evaluation_is_rejected_and_first_kept(service):
    service.create("stu", {"overall_activity": 5})

    with pytest.raises(EvaluationAlreadyExists):
        service.create("stu", {"overall_activity": 1})

    assert service.get("stu").overall_activity == 5
    assert service.count() == 1


def test_update_is_partial(service):
    service.create("stu", {"overall_activity": 5, "design_beauty_rating": 4})

    service.update("stu", {"design_beauty_rating": 2, "student_id": "someone-else"})

    evaluation = service.get("stu")
    assert evaluation.overall_activity == 5
    assert evaluation.design_beauty_rating == 2
    assert evaluation.student_id == "stu"


def test_missing_evaluation(service):
    with pytest.raises(EvaluationNotFound):
        service.get("ghost")
    with pytest.raises(EvaluationNotFound):
        service.update("ghost", {"overall_activity": 1})
    with pytest.raises(EvaluationNotFound):
        service.delete("ghost")


def test_delete(service):
    service.create("stu", {})
    service.delete("stu")

    assert service.list() == []
