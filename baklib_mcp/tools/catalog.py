"""
描述: Baklib 工具端点目录 (声明式)
主要功能:
    - 定义 FieldSpec / EndpointDescriptor 不可变描述结构
    - 以一张表列出全部工具的路径模板、HTTP 方法与参数
    - 生成工具 inputSchema
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Literal
from urllib.parse import quote


FieldLocation = Literal["path", "query", "attribute", "header", "local"]
Action = Literal["get", "list", "create", "update", "delete", "upload"]


# region 描述结构
@dataclass(frozen=True)
class FieldSpec:
    """
    工具参数描述

    属性:
        location: 参数去向 (路径占位符 / 查询串 / attributes / 请求头 / 仅本地使用)
        wire_name: 发送到远端时使用的名称, 默认与 name 相同
        coerce: 发送前的类型转换, 只作用于声明了它的字段
    """
    name: str
    type: str
    description: str
    required: bool = False
    enum: tuple[str, ...] | None = None
    default: Any = None
    location: FieldLocation = "attribute"
    wire_name: str | None = None
    coerce: Callable[[Any], Any] | None = None

    @property
    def wire_key(self) -> str:
        return self.wire_name or self.name

    def to_property(self) -> dict[str, Any]:
        prop: dict[str, Any] = {"type": self.type, "description": self.description}
        if self.enum is not None:
            prop["enum"] = list(self.enum)
        if self.default is not None:
            prop["default"] = self.default
        return prop


@dataclass(frozen=True)
class EndpointDescriptor:
    """单个工具对应的远端端点"""
    name: str
    description: str
    method: str
    path: str
    action: Action
    fields: tuple[FieldSpec, ...] = ()
    resource_type: str | None = None
    envelope_id_field: str | None = None

    def input_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {
            "type": "object",
            "properties": {field.name: field.to_property() for field in self.fields},
        }
        required = [field.name for field in self.fields if field.required]
        if required:
            schema["required"] = required
        return schema

    def path_for(self, arguments: dict[str, Any]) -> str:
        values = {
            field.name: quote(str(arguments[field.name]), safe="")
            for field in self.fields
            if field.location == "path"
        }
        return self.path.format(**values)
# endregion


# region 字段构造辅助
def _path(name: str, description: str) -> FieldSpec:
    return FieldSpec(name, "string", description, required=True, location="path")


def _query(name: str, type_: str, description: str, **kwargs: Any) -> FieldSpec:
    return FieldSpec(name, type_, description, location="query", **kwargs)


def _attr(name: str, type_: str, description: str, **kwargs: Any) -> FieldSpec:
    return FieldSpec(name, type_, description, location="attribute", **kwargs)


def _pagination(per_page_description: str = "Number of items per page.") -> tuple[FieldSpec, ...]:
    return (
        _query("page", "number", "Page number for pagination."),
        _query("per_page", "number", per_page_description),
    )


_PER_PAGE_LIMITED = "Number of items per page (default: 10, max: 50)."
# endregion


# region DAM 资源库
DAM_ENDPOINTS: tuple[EndpointDescriptor, ...] = (
    EndpointDescriptor(
        name="dam_upload_entity",
        description=(
            "Upload a file to Baklib DAM (Digital Asset Management) system. "
            "Returns a signed_id that can be used in knowledge base articles."
        ),
        method="POST",
        path="/dam/files",
        action="upload",
        resource_type="dam_files",
        fields=(
            FieldSpec(
                "file_path",
                "string",
                "Local file path to upload. Can be absolute or relative to current working directory.",
                required=True,
                location="local",
            ),
            FieldSpec(
                "type",
                "string",
                'Resource type: "image", "file", "video", "audio", etc. Defaults to "file".',
                enum=("image", "file", "video", "audio"),
                default="file",
                location="local",
            ),
            FieldSpec(
                "name",
                "string",
                "Optional file name. If not provided, uses the filename from file_path.",
                location="local",
            ),
        ),
    ),
    EndpointDescriptor(
        name="dam_get_entity",
        description="Get file information from Baklib DAM system by ID.",
        method="GET",
        path="/dam/entities/{id}",
        action="get",
        fields=(_path("id", "File ID (signed_id) to retrieve."),),
    ),
    EndpointDescriptor(
        name="dam_update_entity",
        description="Update file metadata (name, description) in Baklib DAM system.",
        method="PATCH",
        path="/dam/files/{id}",
        action="update",
        resource_type="dam_files",
        envelope_id_field="id",
        fields=(
            _path("id", "File ID to update."),
            _attr("name", "string", "New file name."),
            _attr("description", "string", "File description."),
        ),
    ),
    EndpointDescriptor(
        name="dam_delete_entity",
        description="Delete a file from Baklib DAM system.",
        method="DELETE",
        path="/dam/entities/{id}",
        action="delete",
        fields=(_path("id", "File ID to delete."),),
    ),
    EndpointDescriptor(
        name="dam_list_entities",
        description="List files in Baklib DAM system with optional filtering and pagination.",
        method="GET",
        path="/dam/entities",
        action="list",
        fields=(
            *_pagination(),
            _query("type", "string", 'Filter by resource type (e.g., "link", "file", etc.).'),
            _query("name", "string", "Filter by resource name."),
            _query("deleted", "boolean", "Filter by deleted status."),
        ),
    ),
)
# endregion


# region KB 知识库
KB_ENDPOINTS: tuple[EndpointDescriptor, ...] = (
    EndpointDescriptor(
        name="kb_create_article",
        description="Create a new article in a Baklib knowledge base.",
        method="POST",
        path="/kb/spaces/{space_id}/articles",
        action="create",
        fields=(
            _path("space_id", "Knowledge base (space) ID where the article will be created."),
            _attr("title", "string", "Article title (required).", required=True),
            _attr("body", "string", "Article content (optional, HTML or Markdown)."),
            _attr("position", "string", "Sort order value (optional).", coerce=str),
            _attr(
                "parent_id",
                "string",
                "Parent article ID (optional, for creating sub-articles).",
                coerce=str,
            ),
        ),
    ),
    EndpointDescriptor(
        name="kb_get_article",
        description="Get article details from a Baklib knowledge base by space ID and article ID.",
        method="GET",
        path="/kb/spaces/{space_id}/articles/{article_id}",
        action="get",
        fields=(
            _path("space_id", "Knowledge base (space) ID."),
            _path("article_id", "Article ID to retrieve."),
        ),
    ),
    EndpointDescriptor(
        name="kb_update_article",
        description="Update an article in a Baklib knowledge base.",
        method="PATCH",
        path="/kb/spaces/{space_id}/articles/{article_id}",
        action="update",
        fields=(
            _path("space_id", "Knowledge base (space) ID."),
            _path("article_id", "Article ID to update."),
            _attr("title", "string", "New article title."),
            _attr("body", "string", "New article content (HTML or Markdown)."),
            _attr("position", "string", "Sort order value.", coerce=str),
            _attr("parent_id", "string", "Parent article ID.", coerce=str),
        ),
    ),
    EndpointDescriptor(
        name="kb_delete_article",
        description="Delete an article from a Baklib knowledge base.",
        method="DELETE",
        path="/kb/spaces/{space_id}/articles/{article_id}",
        action="delete",
        fields=(
            _path("space_id", "Knowledge base (space) ID."),
            _path("article_id", "Article ID to delete."),
        ),
    ),
    EndpointDescriptor(
        name="kb_list_articles",
        description="List articles in a Baklib knowledge base with optional filtering and pagination.",
        method="GET",
        path="/kb/spaces/{space_id}/articles",
        action="list",
        fields=(
            _path("space_id", "Knowledge base (space) ID to list articles from."),
            *_pagination(),
            _query("keywords", "string", "Search keywords to filter articles."),
            _query("parent_id", "string", "Filter by parent article ID (to get sub-articles)."),
        ),
    ),
    EndpointDescriptor(
        name="kb_list_knowledge_bases",
        description="List all knowledge bases (spaces) accessible by the user.",
        method="GET",
        path="/kb/spaces",
        action="list",
        fields=_pagination(),
    ),
    EndpointDescriptor(
        name="kb_get_knowledge_base",
        description="Get knowledge base (space) details by ID.",
        method="GET",
        path="/kb/spaces/{space_id}",
        action="get",
        fields=(_path("space_id", "Knowledge base (space) ID to retrieve."),),
    ),
)
# endregion


# region Site 站点 / 页面 / 标签
SITE_ENDPOINTS: tuple[EndpointDescriptor, ...] = (
    EndpointDescriptor(
        name="site_list_sites",
        description="List all sites (organizations) accessible by the user with optional pagination.",
        method="GET",
        path="/sites",
        action="list",
        fields=_pagination(_PER_PAGE_LIMITED),
    ),
    EndpointDescriptor(
        name="site_get_site",
        description="Get site (organization) details by ID.",
        method="GET",
        path="/sites/{site_id}",
        action="get",
        fields=(_path("site_id", "Site ID to retrieve."),),
    ),
    EndpointDescriptor(
        name="site_list_pages",
        description="List pages in a Baklib site with optional filtering and pagination.",
        method="GET",
        path="/sites/{site_id}/pages",
        action="list",
        fields=(
            _path("site_id", "Site ID to list pages from."),
            *_pagination(),
            _query("parent_id", "string", "Filter by parent page ID."),
            _query("deleted", "boolean", "Filter by deleted status."),
            _query("published", "boolean", "Filter by published status."),
            _query("keywords", "string", "Search keywords to filter pages."),
            _query("tags", "string", "Filter by tags."),
        ),
    ),
    EndpointDescriptor(
        name="site_create_page",
        description="Create a new page in a Baklib site.",
        method="POST",
        path="/sites/{site_id}/pages",
        action="create",
        fields=(
            _path("site_id", "Site ID where the page will be created."),
            _attr("name", "string", "Page title (required).", required=True),
            _attr("template_name", "string", 'Template type (required, e.g., "page").', required=True),
            _attr("parent_id", "string", "Parent page ID (optional)."),
            _attr(
                "template_variables",
                "object",
                'Template variables (optional, e.g., { content: "...", title: "..." }).',
            ),
            _attr("published", "boolean", "Whether to publish the page (optional)."),
            _attr("position", "number", "Sort order value (optional)."),
        ),
    ),
    EndpointDescriptor(
        name="site_get_page",
        description="Get page details from a Baklib site by site ID and page ID.",
        method="GET",
        path="/sites/{site_id}/pages/{page_id}",
        action="get",
        fields=(
            _path("site_id", "Site ID."),
            _path("page_id", "Page ID to retrieve."),
            _query("full_path", "string", "Optional: Use full path instead of page_id."),
        ),
    ),
    EndpointDescriptor(
        name="site_update_page",
        description="Update a page in a Baklib site.",
        method="PATCH",
        path="/sites/{site_id}/pages/{page_id}",
        action="update",
        fields=(
            _path("site_id", "Site ID."),
            _path("page_id", "Page ID to update."),
            _attr("name", "string", "New page title."),
            _attr("template_variables", "object", "Template variables."),
            _attr("published", "boolean", "Published status."),
            _attr("position", "number", "Sort order value."),
            _query("full_path", "string", "Optional: Use full path instead of page_id."),
        ),
    ),
    EndpointDescriptor(
        name="site_delete_page",
        description="Delete a page from a Baklib site.",
        method="DELETE",
        path="/sites/{site_id}/pages/{page_id}",
        action="delete",
        fields=(
            _path("site_id", "Site ID."),
            _path("page_id", "Page ID to delete."),
        ),
    ),
    EndpointDescriptor(
        name="site_list_tags",
        description="List tags in a Baklib site with optional pagination.",
        method="GET",
        path="/sites/{site_id}/tags",
        action="list",
        fields=(
            _path("site_id", "Site ID to list tags from."),
            *_pagination(),
        ),
    ),
    EndpointDescriptor(
        name="site_create_tag",
        description="Create a new tag in a Baklib site.",
        method="POST",
        path="/sites/{site_id}/tags",
        action="create",
        fields=(
            _path("site_id", "Site ID where the tag will be created."),
            _attr("name", "string", "Tag name (required).", required=True),
            _attr("bg_color", "string", 'Tag background color (optional, e.g., "#FF0000").'),
        ),
    ),
    EndpointDescriptor(
        name="site_get_tag",
        description="Get tag details from a Baklib site by site ID and tag ID.",
        method="GET",
        path="/sites/{site_id}/tags/{tag_id}",
        action="get",
        fields=(
            _path("site_id", "Site ID."),
            _path("tag_id", "Tag ID to retrieve."),
            _query("name", "string", "Optional: Use tag name instead of tag_id."),
        ),
    ),
    EndpointDescriptor(
        name="site_delete_tag",
        description="Delete a tag from a Baklib site.",
        method="DELETE",
        path="/sites/{site_id}/tags/{tag_id}",
        action="delete",
        fields=(
            _path("site_id", "Site ID."),
            _path("tag_id", "Tag ID to delete."),
            _query("name", "string", "Optional: Use tag name instead of tag_id."),
        ),
    ),
)
# endregion


# region 主题 / 用户 / 成员 / 集成
ORGANIZATION_ENDPOINTS: tuple[EndpointDescriptor, ...] = (
    EndpointDescriptor(
        name="theme_list_themes",
        description=(
            "List templates (themes) including organization templates and public "
            "templates with optional filtering and pagination."
        ),
        method="GET",
        path="/themes",
        action="list",
        fields=(
            _query(
                "from",
                "string",
                'Template source: "org" for organization templates, "public" for public templates.',
                enum=("org", "public"),
            ),
            _query(
                "scope",
                "string",
                'Template application type: "cms" or "wiki".',
                enum=("cms", "wiki"),
            ),
            *_pagination(_PER_PAGE_LIMITED),
        ),
    ),
    EndpointDescriptor(
        name="user_get_current",
        description="Get current user information.",
        method="GET",
        path="/user",
        action="get",
    ),
    EndpointDescriptor(
        name="user_list_users",
        description="List all users in the organization with optional pagination.",
        method="GET",
        path="/users",
        action="list",
        fields=_pagination(_PER_PAGE_LIMITED),
    ),
    EndpointDescriptor(
        name="member_get_member",
        description="Get organization member details by ID.",
        method="GET",
        path="/members/{member_id}",
        action="get",
        fields=(_path("member_id", "Member ID to retrieve."),),
    ),
    EndpointDescriptor(
        name="member_list_members",
        description="List organization members with optional pagination.",
        method="GET",
        path="/members",
        action="list",
        fields=_pagination(_PER_PAGE_LIMITED),
    ),
    EndpointDescriptor(
        name="integration_get_integration",
        description="Get integration record details by ID.",
        method="GET",
        path="/integrations/{integration_id}",
        action="get",
        fields=(_path("integration_id", "Integration record ID to retrieve."),),
    ),
    EndpointDescriptor(
        name="integration_list_integrations",
        description="List third-party integrations with optional pagination.",
        method="GET",
        path="/integrations",
        action="list",
        fields=(
            *_pagination(_PER_PAGE_LIMITED),
            FieldSpec(
                "organization_id",
                "number",
                "Organization ID (only used when using supplier token).",
                location="header",
                wire_name="x-organization-id",
            ),
        ),
    ),
)
# endregion


ENDPOINTS: tuple[EndpointDescriptor, ...] = (
    *DAM_ENDPOINTS,
    *KB_ENDPOINTS,
    *SITE_ENDPOINTS,
    *ORGANIZATION_ENDPOINTS,
)
