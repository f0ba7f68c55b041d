"""Tests for waypoint.actions.derive — convention-based route derivation."""

import pytest

from waypoint.actions.derive import RouteDescriptor, derive
from waypoint.actions.identifier import ActionIdentifier
from waypoint.actions.kinds import ActionKind
from waypoint.config import RouteConfig
from waypoint.errors import ConfigurationError, MalformedIdentifier, UnknownActionKind


class TestKindTable:
    @pytest.mark.parametrize(
        ("identifier", "expected"),
        [
            ("Users::Index", "GET /users"),
            ("Users::Show", "GET /users/:id"),
            ("Users::New", "GET /users/new"),
            ("Users::Create", "POST /users"),
            ("Users::Edit", "GET /users/:id/edit"),
            ("Users::Update", "PUT /users/:id"),
            ("Users::Delete", "DELETE /users/:id"),
        ],
    )
    def test_root_level_resource(self, identifier: str, expected: str) -> None:
        assert str(derive(identifier)) == expected

    def test_descriptor_fields(self) -> None:
        descriptor = derive("Users::Show")
        assert descriptor.method == "GET"
        assert descriptor.path == "/users/:id"
        assert descriptor.kind is ActionKind.SHOW
        assert descriptor.identifier == ActionIdentifier(("Users", "Show"))
        assert descriptor.param_names == ("id",)

    def test_collection_has_no_params(self) -> None:
        assert derive("Users::Index").param_names == ()


class TestNamespaces:
    def test_one_namespace(self) -> None:
        assert derive("Admin::Users::Index").path == "/admin/users"

    def test_two_namespaces_keep_order(self) -> None:
        assert derive("Api::V1::Users::Show").path == "/api/v1/users/:id"

    def test_multi_word_namespace_is_snake_cased(self) -> None:
        assert derive("MyAdminSection::Users::Index").path == "/my_admin_section/users"

    def test_multi_word_resource_is_snake_cased(self) -> None:
        assert derive("LineItems::Edit").path == "/line_items/:id/edit"

    def test_lowercase_identifier(self) -> None:
        assert str(derive("admin.users.update")) == "PUT /admin/users/:id"


class TestNested:
    def test_one_parent(self) -> None:
        descriptor = derive("Projects::Users::Index", nested=True)
        assert str(descriptor) == "GET /projects/:project_id/users"
        assert descriptor.param_names == ("project_id",)

    def test_one_parent_member_action(self) -> None:
        descriptor = derive("Projects::Users::Show", nested=True)
        assert descriptor.path == "/projects/:project_id/users/:id"
        assert descriptor.param_names == ("project_id", "id")

    def test_namespace_before_parent(self) -> None:
        assert derive("Admin::Projects::Users::Index", nested=True).path == (
            "/admin/projects/:project_id/users"
        )

    def test_two_parents(self) -> None:
        assert derive("Organizations::Projects::Tasks::Create", nested=2).path == (
            "/organizations/:organization_id/projects/:project_id/tasks"
        )

    def test_not_nested_treats_segments_as_namespaces(self) -> None:
        assert derive("Projects::Users::Index").path == "/projects/users"

    def test_singulars_table_overrides_heuristic(self) -> None:
        config = RouteConfig(singulars={"people": "person"})
        assert derive("People::Posts::Index", nested=True, config=config).path == (
            "/people/:person_id/posts"
        )

    def test_table_keyed_by_snake_case_plural(self) -> None:
        config = RouteConfig(singulars={"team_members": "member"})
        assert derive("TeamMembers::Notes::Index", nested=True, config=config).path == (
            "/team_members/:member_id/notes"
        )

    def test_table_singular_is_snake_cased(self) -> None:
        config = RouteConfig(singulars={"people": "Person", "team_members": "TeamMember"})
        assert derive("People::Posts::Index", nested=True, config=config).path == (
            "/people/:person_id/posts"
        )
        assert derive("TeamMembers::Notes::Show", nested=True, config=config).path == (
            "/team_members/:team_member_id/notes/:id"
        )

    def test_table_singular_without_path_safe_characters(self) -> None:
        config = RouteConfig(singulars={"people": "!!"})
        with pytest.raises(MalformedIdentifier, match="no path-safe characters"):
            derive("People::Posts::Index", nested=True, config=config)

    def test_strict_singulars_rejects_missing_entry(self) -> None:
        config = RouteConfig(strict_singulars=True)
        with pytest.raises(MalformedIdentifier, match="no singular configured for parent resource 'projects'"):
            derive("Projects::Users::Index", nested=True, config=config)

    def test_strict_singulars_with_entry(self) -> None:
        config = RouteConfig(strict_singulars=True, singulars={"projects": "project"})
        assert derive("Projects::Users::Index", nested=True, config=config).path == (
            "/projects/:project_id/users"
        )

    def test_depth_leaving_no_resource(self) -> None:
        with pytest.raises(MalformedIdentifier, match="leaves no resource segment"):
            derive("Users::Index", nested=True)

    def test_negative_depth(self) -> None:
        with pytest.raises(MalformedIdentifier, match="nesting depth"):
            derive("Projects::Users::Index", nested=-1)


class TestConfig:
    def test_path_prefix(self) -> None:
        config = RouteConfig(path_prefix="/api/")
        assert derive("Users::Show", config=config).path == "/api/users/:id"

    def test_id_param(self) -> None:
        config = RouteConfig(id_param="user_id")
        assert derive("Users::Edit", config=config).path == "/users/:user_id/edit"


class TestErrors:
    def test_single_segment_missing_kind(self) -> None:
        with pytest.raises(MalformedIdentifier, match="missing action-kind segment"):
            derive("Users")

    def test_single_segment_missing_resource(self) -> None:
        with pytest.raises(MalformedIdentifier, match="missing resource segment"):
            derive("Show")

    def test_unknown_kind(self) -> None:
        with pytest.raises(UnknownActionKind) as exc_info:
            derive("Users::Destroy")
        assert exc_info.value.kind == "Destroy"
        assert "Index" in str(exc_info.value)

    def test_unpathable_segment(self) -> None:
        with pytest.raises(MalformedIdentifier, match="path-safe"):
            derive(["Users", "!!", "Show"])


class TestDeterminism:
    def test_same_input_same_descriptor(self) -> None:
        first = derive("Projects::Users::Edit", nested=True)
        second = derive("Projects::Users::Edit", nested=True)
        assert first == second
        assert hash(first) == hash(second)

    def test_descriptor_frozen(self) -> None:
        descriptor = derive("Users::Show")
        with pytest.raises(AttributeError):
            descriptor.method = "POST"  # type: ignore[misc]


class TestParamTypes:
    def test_with_param_types(self) -> None:
        descriptor = derive("Projects::Users::Show", nested=True).with_param_types(
            {"project_id": "int", "id": "int"}
        )
        assert descriptor.path == "/projects/:project_id/users/:id"
        assert descriptor.pattern == "/projects/:project_id:int/users/:id:int"
        assert descriptor.param_types == {"project_id": "int", "id": "int"}

    def test_unknown_param(self) -> None:
        with pytest.raises(ConfigurationError, match="has no route param 'slug'"):
            derive("Users::Show").with_param_types({"slug": "int"})

    def test_unsupported_type(self) -> None:
        with pytest.raises(ConfigurationError, match="Unsupported type"):
            derive("Users::Show").with_param_types({"id": "uuid"})

    def test_returns_new_descriptor(self) -> None:
        original = derive("Users::Show")
        typed = original.with_param_types({"id": "int"})
        assert isinstance(typed, RouteDescriptor)
        assert original.pattern == "/users/:id"
        assert typed is not original
