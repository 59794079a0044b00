import uuid

import pytest

from anatomy_quiz.domain.mesh_names import format_mesh_name_to_display_name

API = "/api/v1"


@pytest.mark.parametrize(
    "mesh_name, expected",
    [
        ("Upper_Extremity_Bones_humerus_L_001", "Humerus (L)"),
        ("bones_femur_R", "Femur"),
        ("organs_left_lung", "Left Lung"),
        ("arteries_aorta_002", "Aorta"),
        ("Skull_Bones_mandible", "Mandible"),
        ("heart", "Heart"),
    ],
)
def test_format_mesh_name(mesh_name, expected):
    assert format_mesh_name_to_display_name(mesh_name) == expected


def test_create_mesh_derives_display_name(client):
    group = str(uuid.uuid4())
    resp = client.post(
        f"{API}/mesh-catalog",
        json={"meshName": "bones_humerus_L_001", "organGroupIds": [group, group], "defaultStudyYear": 1},
    )

    assert resp.status_code == 201
    body = resp.json()
    assert body["displayName"] == "Humerus (L)"
    assert body["organGroupIds"] == [group]


def test_create_mesh_keeps_given_display_name(client):
    resp = client.post(f"{API}/mesh-catalog", json={"meshName": "organs_heart", "displayName": "Cor"})
    assert resp.json()["displayName"] == "Cor"


def test_create_mesh_rejects_bad_group_ids(client):
    resp = client.post(f"{API}/mesh-catalog", json={"meshName": "organs_heart", "organGroupIds": ["thorax"]})
    assert resp.status_code == 422


def test_search_meshes(client, repos):
    repos.catalog.add_mesh("Heart", mesh_name="organs_heart")
    repos.catalog.add_mesh("Left Lung", mesh_name="organs_lung_L")
    repos.catalog.add_mesh("Humerus", mesh_name="bones_humerus_L")

    names = lambda resp: sorted(m["displayName"] for m in resp.json())
    assert names(client.get(f"{API}/mesh-catalog")) == ["Heart", "Humerus", "Left Lung"]
    assert names(client.get(f"{API}/mesh-catalog", params={"search": "  LUNG "})) == ["Left Lung"]
    assert names(client.get(f"{API}/mesh-catalog", params={"search": "organs"})) == ["Heart", "Left Lung"]
    assert names(client.get(f"{API}/mesh-catalog", params={"meshName": "bones_humerus_L"})) == ["Humerus"]
    assert names(client.get(f"{API}/mesh-catalog", params={"meshName": "bones_humerus"})) == []


def test_search_organ_groups(client, repos):
    repos.catalog.add_group("Upper Limb")
    repos.catalog.add_group("Lower Limb")
    repos.catalog.add_group("Thorax")

    resp = client.get(f"{API}/organ-groups", params={"search": "limb"})

    assert resp.status_code == 200
    assert sorted(g["groupName"] for g in resp.json()) == ["Lower Limb", "Upper Limb"]
    assert len(client.get(f"{API}/organ-groups").json()) == 3
