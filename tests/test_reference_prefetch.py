import uuid
from datetime import datetime, timezone

from anatomy_quiz.domain.model import (
    MeshCatalogItem,
    OrganGroup,
    Quiz,
    SelectOrganQuestion,
    ShortAnswerQuestion,
    Submission,
    SubmissionAnswer,
)
from anatomy_quiz.domain.results import ReferenceMaps, collect_reference_ids
from anatomy_quiz.services.results_service import ResultsService
from anatomy_quiz.services.rows import quiz_from_rows, submission_from_row


def uid() -> str:
    return str(uuid.uuid4())


def test_collects_targets_and_clicked_meshes_deduplicated():
    mesh_target, group_target, clicked = uid(), uid(), uid()
    q_mesh = SelectOrganQuestion(id=uid(), question_text="Click the aorta", target_type="mesh", target_id=mesh_target)
    q_group = SelectOrganQuestion(id=uid(), question_text="Click a rib", target_type="group", target_id=group_target)
    quiz = Quiz(id=uid(), title="Thorax", study_year=2, questions=[q_mesh, q_group, ShortAnswerQuestion(id=uid(), question_text="?")])
    subs = [
        Submission(
            id=uid(), quiz_id=quiz.id, study_year_at_submission=2,
            submitted_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
            answers=[
                SubmissionAnswer(q_mesh.id, clicked_mesh_id=clicked),
                SubmissionAnswer(q_group.id, clicked_mesh_id=clicked),
                SubmissionAnswer(q_group.id, clicked_mesh_id=mesh_target),
            ],
        )
    ]

    mesh_ids, group_ids = collect_reference_ids(quiz, subs)

    assert mesh_ids == {mesh_target, clicked}
    assert group_ids == {group_target}


def test_malformed_ids_are_dropped():
    q = SelectOrganQuestion(id=uid(), question_text="Click the spleen", target_type="mesh", target_id="spleen")
    quiz = Quiz(id=uid(), title="Abdomen", study_year=1, questions=[q])
    subs = [
        Submission(
            id=uid(), quiz_id=quiz.id, study_year_at_submission=1,
            submitted_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
            answers=[SubmissionAnswer(q.id, clicked_mesh_id="12345"), SubmissionAnswer(q.id, clicked_mesh_id="")],
        )
    ]

    assert collect_reference_ids(quiz, subs) == (set(), set())


def test_reference_maps_lookups():
    group = uid()
    mesh = MeshCatalogItem(id=uid(), mesh_name="bones_radius", display_name="Radius", organ_group_ids=frozenset({group}))
    refs = ReferenceMaps.build([mesh], [OrganGroup(id=group, group_name="Forearm")])

    assert refs.mesh_display_name(mesh.id) == "Radius"
    assert refs.mesh_display_name("abcdef123456").startswith("Unknown Mesh (abcdef...")
    assert refs.mesh_in_group(mesh.id, group)
    assert not refs.mesh_in_group(uid(), group)


def test_service_batches_one_read_per_table(repos):
    upper_limb = repos.catalog.add_group("Upper Limb")
    humerus = repos.catalog.add_mesh("Humerus", group_ids=[upper_limb])
    heart = repos.catalog.add_mesh("Heart")
    quiz_id = repos.quizzes.create_quiz(
        {"title": "Mixed", "study_year": 1},
        [
            {"id": uid(), "questionText": "Click the heart", "type": "select-organ", "targetType": "mesh", "target_id": heart},
            {"id": uid(), "questionText": "Click an arm bone", "type": "select-organ", "targetType": "group", "target_id": upper_limb},
        ],
    )
    _, questions = repos.quizzes.get_quiz_with_questions(quiz_id)
    for _ in range(25):
        repos.submissions.create_submission(
            {
                "quiz_id": quiz_id,
                "study_year_at_submission": 1,
                "submitted_at": "2026-02-01T10:00:00+00:00",
                "answers": [
                    {"question_id": questions[0]["id"], "responseText_ClickedMesh_id": humerus},
                    {"question_id": questions[1]["id"], "responseText_ClickedMesh_id": humerus},
                ],
            }
        )
    svc = ResultsService(repos.quizzes, repos.submissions, repos.catalog)

    results = svc.get_results(quiz_id)

    assert repos.catalog.batch_calls == [("meshes", {heart, humerus}), ("groups", {upper_limb})]
    assert results[0]["correctTargetDisplayName"] == "Heart"
    assert results[1]["totalCorrect"] == 25


def test_service_skips_batch_reads_without_references(repos):
    quiz_id = repos.quizzes.create_quiz(
        {"title": "Text only", "study_year": 1},
        [{"id": uid(), "questionText": "Explain", "type": "short-answer"}],
    )
    svc = ResultsService(repos.quizzes, repos.submissions, repos.catalog)

    assert svc.get_results(quiz_id)[0]["submittedTextAnswers"] == []
    assert repos.catalog.batch_calls == []


def test_rows_map_to_domain_variants():
    quiz = quiz_from_rows(
        {"id": uid(), "title": "Q", "study_year": 3, "scheduled_at": "2026-04-01T08:00:00Z"},
        [
            {"id": uid(), "position": 0, "question_text": "a", "type": "true-false",
             "answers": [{"id": uid(), "text": "True", "isCorrect": True}]},
            {"id": uid(), "position": 1, "question_text": "b", "type": "essay"},
        ],
    )
    assert [q.type for q in quiz.questions] == ["true-false"]
    assert quiz.scheduled_at.tzinfo is not None

    sub = submission_from_row(
        {"id": uid(), "quiz_id": quiz.id, "study_year_at_submission": 3,
         "submitted_at": "2026-04-01T09:00:00+00:00",
         "answers": [{"question_id": quiz.questions[0].id, "selectedAnswerId_Index": 0}]}
    )
    assert sub.answers[0].selected_index == 0
    assert sub.answers[0].clicked_mesh_id is None


def test_select_organ_row_without_target_type_maps_to_no_target():
    quiz = quiz_from_rows(
        {"id": uid(), "title": "Q", "study_year": 1},
        [
            {"id": uid(), "position": 0, "question_text": "a", "type": "select-organ", "target_id": uid()},
            {"id": uid(), "position": 1, "question_text": "b", "type": "select-organ",
             "target_type": "region", "target_id": uid()},
            {"id": uid(), "position": 2, "question_text": "c", "type": "select-organ",
             "target_type": "group", "target_id": uid()},
        ],
    )
    assert [q.target_type for q in quiz.questions] == [None, None, "group"]
