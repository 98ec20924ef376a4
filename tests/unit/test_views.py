import httpx

from bremray.api import ApiClient, JobsApi, PhotosApi, TemplatesApi
from bremray.schemas import JobStatus
from bremray.stores import JobsStore, TemplatesStore
from bremray.stores.views import active_templates, jobs_list, jobs_with_status


def _job(job_id, status):
    return {"id": job_id, "customerId": "c1", "templateId": "t1", "address": "1 Main St", "status": status}


def _jobs_store(rows):
    client = ApiClient("http://test/api", transport=httpx.MockTransport(lambda request: httpx.Response(200, json=rows)))
    return JobsStore(JobsApi(client), PhotosApi(client))


async def test_view_is_seeded_from_current_state():
    store = _jobs_store([])
    view = jobs_list(store)
    assert view.value == []


async def test_view_follows_store_updates():
    store = _jobs_store([_job("j1", "scheduled"), _job("j2", "completed"), _job("j3", "scheduled")])
    scheduled = jobs_with_status(store, JobStatus.SCHEDULED)
    seen = []
    scheduled.subscribe(seen.append)

    await store.load()
    assert [j.id for j in scheduled.value] == ["j1", "j3"]
    assert seen[0] == []
    assert [j.id for j in seen[-1]] == ["j1", "j3"]


async def test_closed_view_stops_following():
    store = _jobs_store([_job("j1", "scheduled")])
    view = jobs_list(store)
    view.close()
    await store.load()
    assert view.value == []


async def test_active_templates_view():
    rows = [{"id": "t1", "name": "Panel Upgrade", "isActive": True}, {"id": "t2", "name": "Old", "isActive": False}]
    client = ApiClient("http://test/api", transport=httpx.MockTransport(lambda request: httpx.Response(200, json=rows)))
    store = TemplatesStore(TemplatesApi(client))
    view = active_templates(store)
    await store.load()
    assert [t.id for t in view.value] == ["t1"]
    assert [t.id for t in store.active()] == ["t1"]
