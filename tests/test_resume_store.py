import unittest

from support import good_resume

from app.core.resume_store import (  # noqa: E402
    SQLiteResumeStore,
    clear_resumes,
    delete_resume,
    load_resume,
    save_resume,
)


class ResumeStoreTests(unittest.TestCase):
    def setUp(self):
        clear_resumes()

    def test_save_then_load_returns_equal_document(self):
        document = good_resume()
        save_resume("user-1", document)
        self.assertEqual(load_resume("user-1"), document)

    def test_save_overwrites_existing_document(self):
        save_resume("user-1", good_resume())
        updated = good_resume().model_copy(update={"summary": "Short summary"})
        save_resume("user-1", updated)
        self.assertEqual(load_resume("user-1").summary, "Short summary")

    def test_missing_and_deleted_documents(self):
        self.assertIsNone(load_resume("nobody"))
        save_resume("user-2", good_resume())
        self.assertTrue(delete_resume("user-2"))
        self.assertFalse(delete_resume("user-2"))
        self.assertIsNone(load_resume("user-2"))

    def test_store_class_follows_module_functions(self):
        store = SQLiteResumeStore()
        store.save_resume("user-3", good_resume())
        self.assertEqual(store.load_resume("user-3").personal_info.name, "Jane Doe")
        self.assertTrue(store.delete_resume("user-3"))


if __name__ == "__main__":
    unittest.main()
