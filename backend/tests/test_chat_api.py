import json


def test_chat_returns_patch_and_persists_context(client, auth_headers, create_project, create_slide, scripted_driver):
    slide = create_slide(create_project()["id"], "Market")
    scripted_driver.queue(
        'Here is a tighter version: {"title": "Market Size", "content": "$4B TAM"}',
        "Nothing else to change.",
    )

    first = client.post(
        "/chat",
        json={
            "prompt": "Tighten this",
            "slide_id": slide["id"],
            "slideData": {"id": str(slide["id"]), "title": "Market", "content": "Big", "heroImageUrl": None},
        },
        headers=auth_headers,
    )
    assert first.status_code == 200
    assert first.json() == {
        "edit": 'Here is a tighter version: {"title": "Market Size", "content": "$4B TAM"}',
        "context": "Tighten this",
        "slideUpdates": {"title": "Market Size", "content": "$4B TAM"},
    }
    assert '"title": "Market"' in scripted_driver.calls[0]["user_prompt"]

    second = client.post("/chat", json={"prompt": "Anything else?", "slide_id": slide["id"]}, headers=auth_headers)
    assert second.json() == {"edit": "Nothing else to change.", "context": "Tighten this\nAnything else?"}
    assert scripted_driver.calls[1]["user_prompt"] == "Context: Tighten this\n\nUser request: Anything else?"


def test_chat_patch_contents_are_not_filtered(client, auth_headers, create_project, create_slide, scripted_driver):
    slide = create_slide(create_project()["id"], "Team")
    patch = {"title": None, "speakerNotes": "extra", "layout": "grid"}
    scripted_driver.queue(json.dumps(patch))

    response = client.post("/chat", json={"prompt": "Fix", "slide_id": slide["id"]}, headers=auth_headers)
    assert response.json()["slideUpdates"] == patch


def test_chat_failure_still_records_context(client, auth_headers, create_project, create_slide, scripted_driver):
    slide = create_slide(create_project()["id"], "Team")
    scripted_driver.queue(ConnectionError("reset"), "ok")

    failed = client.post("/chat", json={"prompt": "One", "slide_id": slide["id"]}, headers=auth_headers)
    assert failed.status_code == 200
    assert failed.json()["edit"] == "I'm having trouble processing your request. Please try again."
    assert "slideUpdates" not in failed.json()

    later = client.post("/chat", json={"prompt": "Two", "slide_id": slide["id"]}, headers=auth_headers)
    assert later.json()["context"] == "One\nTwo"


def test_chat_context_is_per_slide(client, auth_headers, create_project, create_slide, scripted_driver):
    project = create_project()
    first = create_slide(project["id"], "One")
    second = create_slide(project["id"], "Two")
    scripted_driver.queue("a", "b")

    client.post("/chat", json={"prompt": "For one", "slide_id": first["id"]}, headers=auth_headers)
    response = client.post("/chat", json={"prompt": "For two", "slide_id": second["id"]}, headers=auth_headers)
    assert response.json()["context"] == "For two"


def test_chat_on_foreign_slide(client, other_headers, create_project, create_slide, scripted_driver):
    slide = create_slide(create_project()["id"], "Private")
    response = client.post("/chat", json={"prompt": "Leak it", "slide_id": slide["id"]}, headers=other_headers)

    assert response.status_code == 404
    assert scripted_driver.calls == []


def test_chat_requires_prompt(client, auth_headers, create_project, create_slide):
    slide = create_slide(create_project()["id"], "Any")
    response = client.post("/chat", json={"prompt": "", "slide_id": slide["id"]}, headers=auth_headers)
    assert response.status_code == 400


def test_chat_without_model_credential_replies_with_trouble(unconfigured_model, auth_headers, create_project, create_slide):
    slide = create_slide(create_project()["id"], "Pricing")
    response = unconfigured_model.post("/chat", json={"prompt": "hi", "slide_id": slide["id"]}, headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {
        "edit": "I'm having trouble processing your request. Please try again.",
        "context": "hi",
    }


def test_chat_reports_context_including_concurrent_edit(
    client, auth_headers, create_project, create_slide, session_factory
):
    from app import app
    from services.ai.drivers import TextGenerationDriver
    from services.chat import ChatEditService, ConversationContextStore
    from services.chat.routes import get_chat_edit_service

    slide = create_slide(create_project()["id"], "Pricing")

    class InterleavingDriver(TextGenerationDriver):
        """Another request stores an instruction while the model is thinking."""

        async def complete(self, system_prompt, user_prompt, *, model, temperature=0.7, max_tokens=2000):
            with session_factory() as other:
                ConversationContextStore(other).append(slide["id"], "From another tab")
                other.commit()
            return "Done."

    app.dependency_overrides[get_chat_edit_service] = lambda: ChatEditService(driver=InterleavingDriver())
    response = client.post("/chat", json={"prompt": "Mine", "slide_id": slide["id"]}, headers=auth_headers)

    assert response.json()["context"] == "From another tab\nMine"
    with session_factory() as db:
        assert ConversationContextStore(db).get(slide["id"]) == "From another tab\nMine"
