def test_generate_returns_reply_and_extracted_code(client, fake_llm):
    fake_llm.generate_chat.return_value = "Here you go:\n```mermaid\nflowchart TD\nA-->B\n```"

    response = client.post(
        "/api/generate-diagram/",
        json={
            "prompt": "make a flowchart from A to B",
            "messages": [{"role": "user", "content": "hi", "timestamp": 1}],
            "currentCode": "",
        },
    )

    assert response.status_code == 200
    assert response.json() == {
        "response": "Here you go:\n```mermaid\nflowchart TD\nA-->B\n```",
        "code": "flowchart TD\nA-->B",
    }
    messages = fake_llm.generate_chat.await_args.kwargs["messages"]
    assert messages[0] == {"role": "user", "content": "hi"}
    assert messages[-1] == {"role": "user", "content": "make a flowchart from A to B"}


def test_reply_without_block_falls_back_to_current_code(client, fake_llm):
    response = client.post(
        "/api/generate-diagram/",
        json={"prompt": "what is this?", "currentCode": "pie title Pets\n\"Dogs\" : 3"},
    )

    assert response.json()["code"] == "pie title Pets\n\"Dogs\" : 3"


def test_style_guide_colors_reach_the_prompt(client, fake_llm):
    client.post(
        "/api/generate-diagram/",
        json={"prompt": "color it", "styleGuide": {"colors": {"primary": "#ABCDEF"}}},
    )

    assert "Delft Blue (#ABCDEF)" in fake_llm.generate_chat.await_args.kwargs["system_prompt"]


def test_model_failure_is_reported_as_500(client, fake_llm):
    fake_llm.generate_chat.side_effect = TimeoutError("read timed out")

    response = client.post("/api/generate-diagram/", json={"prompt": "anything"})

    assert response.status_code == 500
    assert response.json() == {"detail": "Failed to generate diagram"}


def test_empty_prompt_is_rejected(client, fake_llm):
    response = client.post("/api/generate-diagram/", json={"prompt": ""})

    assert response.status_code == 422
    fake_llm.generate_chat.assert_not_awaited()


def test_fix_request_requires_error_description(client, fake_llm):
    response = client.post(
        "/api/generate-diagram/",
        json={"prompt": "fix it", "currentCode": "A-->B", "isFixRequest": True},
    )

    assert response.status_code == 422
    fake_llm.generate_chat.assert_not_awaited()


def test_fix_request_uses_error_in_prompt(client, fake_llm):
    fake_llm.generate_chat.return_value = "Added the declaration.\n```mermaid\nflowchart TD\nA-->B\n```"

    response = client.post(
        "/api/generate-diagram/",
        json={
            "prompt": "fix it",
            "currentCode": "A-->B",
            "isFixRequest": True,
            "errorDescription": "No diagram type detected",
        },
    )

    assert response.json()["code"] == "flowchart TD\nA-->B"
    assert "No diagram type detected" in fake_llm.generate_chat.await_args.kwargs["system_prompt"]


def test_fix_attempts_beyond_limit_are_rejected(client, fake_llm):
    response = client.post(
        "/api/generate-diagram/",
        json={
            "prompt": "fix it",
            "currentCode": "A-->B",
            "isFixRequest": True,
            "errorDescription": "No diagram type detected",
            "fixAttempt": 4,
        },
    )

    assert response.status_code == 400
    fake_llm.generate_chat.assert_not_awaited()
