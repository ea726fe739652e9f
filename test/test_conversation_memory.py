from storage.conversation_memory import ConversationMemory


def test_turn_is_recorded():
    memory = ConversationMemory()
    gen = memory.begin_turn("what is due?")
    assert memory.complete_turn(gen, "Your essay.")
    assert [m.role for m in memory.messages()] == ["user", "assistant"]


def test_stale_reply_is_dropped():
    memory = ConversationMemory()
    first = memory.begin_turn("first question")
    second = memory.begin_turn("second question")

    assert memory.complete_turn(second, "second answer")
    assert not memory.complete_turn(first, "late first answer")
    assert [m.content for m in memory.messages()] == [
        "first question",
        "second question",
        "second answer",
    ]


def test_reset_invalidates_in_flight_turn():
    memory = ConversationMemory()
    gen = memory.begin_turn("question")
    memory.reset()
    assert not memory.complete_turn(gen, "answer")
    assert len(memory) == 0


def test_history_is_bounded():
    memory = ConversationMemory(max_messages=50)
    for i in range(60):
        memory.add_message("user", f"m{i}")
    messages = memory.messages()
    assert len(messages) == 50
    assert messages[0].content == "m10"


def test_context_prefix():
    memory = ConversationMemory()
    assert memory.context() == ""
    memory.add_message("user", "hi")
    memory.add_message("assistant", "hello")
    assert memory.context() == "Previous conversation context:\nHuman: hi\nAssistant: hello\n\n"
    assert memory.context(max_messages=1) == "Previous conversation context:\nAssistant: hello\n\n"


def test_summary_topics_from_user_messages_only():
    memory = ConversationMemory()
    memory.add_message("user", "Any assignment due for my study group?")
    memory.add_message("assistant", "You have a meeting on the calendar")
    summary = memory.summary()
    assert summary.message_count == 2
    assert summary.topics == ["tasks", "academics", "scheduling"]
    assert summary.last_interaction is not None


def test_len_tracks_bounded_history():
    memory = ConversationMemory(max_messages=3)
    for i in range(5):
        memory.add_message("assistant", f"a{i}")
    assert len(memory) == 3
    assert [m.content for m in memory.messages()] == ["a2", "a3", "a4"]
