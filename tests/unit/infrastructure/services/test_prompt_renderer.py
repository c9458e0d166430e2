"""Unit tests for the integration prompt renderer."""

from flexdata.domain.entities import Collection
from flexdata.infrastructure.services import PromptRenderer
from tests.fakes import make_field


def test_prompt_lists_url_and_key_mapping():
    collection = Collection(id="c1", project_id="p1", name="songs")
    fields = [make_field("fld_aaaaaaaa", "Title"), make_field("fld_bbbbbbbb", None, "file")]

    prompt = PromptRenderer().render(
        external_url="https://cms.example.com/",
        api_prefix="/api/v1",
        collection=collection,
        fields=fields,
    )

    assert "https://cms.example.com/api/v1/p1/c1" in prompt
    assert '"Title": item["fld_aaaaaaaa"] (text)' in prompt
    assert '"fld_bbbbbbbb": item["fld_bbbbbbbb"] (file)' in prompt
    assert 'item["fld_aaaaaaaa"]' in prompt.split("### TASK")[1]


def test_prompt_without_fields():
    collection = Collection(id="c1", project_id="p1", name="empty")

    prompt = PromptRenderer().render("http://x", "/api/v1", collection, [])

    assert "(no fields yet)" in prompt
