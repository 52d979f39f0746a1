from core.services.operations import Create, ListHosts, Start
from core.services.queue import OperationQueue


def test_enqueue_preserves_order():
    ops = [Start(), Create(), ListHosts()]
    queue = OperationQueue()
    for op in ops:
        queue.enqueue(op)
    assert list(queue) == ops
    assert len(queue) == 3


def test_setters_apply_to_every_queued_create():
    first, second = Create(), Create()
    queue = OperationQueue([first, Start(), second])

    queue.set_image(["ubuntu", "tools"])
    queue.set_key_path("~/.ssh/id_rsa.pub")
    queue.set_raw_key("ssh-rsa AAA")

    for op in (first, second):
        assert op.images == ["ubuntu", "tools"]
        assert op.key_path == "~/.ssh/id_rsa.pub"
        assert op.raw_key == "ssh-rsa AAA"


def test_setters_do_not_touch_later_creates():
    queue = OperationQueue([Create()])
    queue.set_image(["ubuntu"])
    late = Create()
    queue.enqueue(late)
    assert late.images == []


def test_setters_copy_image_list():
    images = ["ubuntu"]
    op = Create()
    OperationQueue([op]).set_image(images)
    images.append("other")
    assert op.images == ["ubuntu"]


def test_setters_without_create_are_noops():
    queue = OperationQueue([Start()])
    queue.set_image(["ubuntu"])
    assert len(queue) == 1
